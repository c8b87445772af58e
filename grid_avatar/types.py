"""Common type aliases shared by the colour, glyph and renderer modules."""

from typing import Tuple

RGB = Tuple[int, int, int]

# Inclusive pixel box (x0, y0, x1, y1), same convention as ``ImageDraw.rectangle``.
PixelBox = Tuple[int, int, int, int]

Point = Tuple[float, float]

CacheKey = str

StepIndex = int
