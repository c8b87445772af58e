"""Rendering subpackage.

Turns a derived colour and a glyph into a small palette PNG. The renderer
focuses on:

* A fixed serpentine traversal of a 4x4 tile grid, so the step index given to
  each tile (and therefore which corner is brightest) is data, not code.
* A rotated letter with a contrast-aware drop shadow.
* Lossless palette quantization to keep the cached files tiny.

See :mod:`grid_avatar.renderer.avatar` for the traversal table and the
composition routines.
"""
