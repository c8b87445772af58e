"""grid_avatar
==============

Deterministic letter identicons: a 4x4 grid of tiles shaded from a colour
derived from the CRC-32 of a key, with a rotated letter and drop shadow on
top, stored as a small palette PNG.

Typical use::

    from grid_avatar import generate_avatar

    png, key = generate_avatar("Tiger-222", "Tiger-222")  # key == "c339a385_T_80"

The symbols re-exported here are the public surface; the rendering internals
live in :mod:`grid_avatar.renderer.avatar`.
"""

from .avatar import cache_key, generate_avatar, get_or_create
from .cache import AvatarStore, FileStore, MemoryStore
from .color import DerivedColor, GradientStep, derive, gradient_step, tile_color
from .config import AvatarConfig
from .errors import AvatarError, ConfigurationError, ResourceError
from .glyph import Glyph, normalize_letter
from .renderer.avatar import AvatarRenderer, render

__all__ = [
    "AvatarConfig",
    "AvatarError",
    "AvatarRenderer",
    "AvatarStore",
    "ConfigurationError",
    "DerivedColor",
    "FileStore",
    "Glyph",
    "GradientStep",
    "MemoryStore",
    "ResourceError",
    "cache_key",
    "derive",
    "generate_avatar",
    "get_or_create",
    "gradient_step",
    "normalize_letter",
    "render",
    "tile_color",
]
