"""Letter glyph: normalisation, measurement and rotated rasterisation.

Geometry follows the conventions of TrueType bounding boxes measured from the
baseline origin of the glyph: y grows downwards, so the top corners carry
negative y values, and a positive angle rotates the glyph counter-clockwise
around that origin.
"""

import math
import string
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from loguru import logger
from PIL import Image, ImageDraw, ImageFont

from grid_avatar.color import DerivedColor
from grid_avatar.errors import ResourceError
from grid_avatar.types import RGB, Point

FALLBACK_CHAR = "*"
LIGHT_GRAY: RGB = (222, 222, 222)
DARK_GRAY: RGB = (33, 33, 33)
BRIGHTNESS_THRESHOLD = 127


@dataclass(frozen=True)
class Glyph:
    char: str


@dataclass(frozen=True)
class GlyphBox:
    """Rotated bounding box of a glyph, relative to its baseline origin.

    Corners are ordered lower-left, lower-right, upper-right, upper-left.
    """

    corners: Tuple[Point, Point, Point, Point]

    @property
    def width(self) -> float:
        return max(x for x, _ in self.corners)

    @property
    def height(self) -> float:
        return min(y for _, y in self.corners)


def normalize_letter(source: str) -> Glyph:
    """Upper-case the first character of ``source``; non ASCII letters become ``*``."""
    if source and source[0] in string.ascii_letters:
        return Glyph(source[0].upper())
    return Glyph(FALLBACK_CHAR)


@lru_cache(maxsize=32)
def load_font(path: str, size_px: int) -> ImageFont.FreeTypeFont:
    """Load (once per path and size) the TrueType font used for glyphs."""
    try:
        font = ImageFont.truetype(path, size_px)
    except OSError as e:
        logger.error("Cannot load avatar font {} ({}px): {}", path, size_px, e)
        raise ResourceError(f"Cannot load font '{path}': {e}") from e
    logger.debug("Loaded avatar font {} at {}px", path, size_px)
    return font


def _rotate(x: float, y: float, angle: float) -> Point:
    rad = math.radians(angle)
    cos, sin = math.cos(rad), math.sin(rad)
    return (x * cos + y * sin, -x * sin + y * cos)


def measure(font: ImageFont.FreeTypeFont, char: str, angle: float) -> GlyphBox:
    left, top, right, bottom = font.getbbox(char, anchor="ls")
    return GlyphBox(
        corners=(
            _rotate(left, bottom, angle),
            _rotate(right, bottom, angle),
            _rotate(right, top, angle),
            _rotate(left, top, angle),
        )
    )


def placement(side_length: int, box: GlyphBox) -> Tuple[int, int]:
    """Baseline origin that visually centres the rotated glyph on the canvas."""
    x = math.floor((side_length - box.width) / 2) + 2
    y = math.floor((side_length - box.height) / 2)
    return x, y


def contrast_pair(color: DerivedColor) -> Tuple[RGB, RGB]:
    """Return ``(shadow, glyph)`` colours for a background of ``color``.

    Dark backgrounds get a light glyph over a dark shadow and vice versa.
    """
    if color.brightness < BRIGHTNESS_THRESHOLD:
        return DARK_GRAY, LIGHT_GRAY
    return LIGHT_GRAY, DARK_GRAY


def draw_glyph(
    canvas: Image.Image,
    font: ImageFont.FreeTypeFont,
    char: str,
    angle: float,
    origin: Tuple[int, int],
    fill: RGB,
) -> Image.Image:
    """Paint ``char`` rotated by ``angle`` with its baseline origin at ``origin``."""
    left, top, right, bottom = font.getbbox(char, anchor="ls")
    # Any rotation about the origin stays inside this radius.
    radius = (
        int(math.ceil(math.hypot(max(abs(left), abs(right)), max(abs(top), abs(bottom)))))
        + 2
    )
    size = 2 * radius + 1

    mask = Image.new("L", (size, size), 0)
    ImageDraw.Draw(mask).text((radius, radius), char, fill=255, font=font, anchor="ls")
    if angle:
        mask = mask.rotate(
            angle, resample=Image.Resampling.BICUBIC, center=(radius, radius)
        )

    x0, y0 = origin[0] - radius, origin[1] - radius
    canvas.paste(fill, (x0, y0, x0 + size, y0 + size), mask)
    return canvas
