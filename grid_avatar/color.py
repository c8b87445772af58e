"""Colour derivation.

An avatar's colours are a pure function of its key string:

* ``derive`` hashes the key with CRC-32 (the zlib / ISO-HDLC variant, as
  returned by :func:`zlib.crc32`) and reads the eight hex digits as an RGBA
  quadruple. The alpha byte is kept for completeness but never drawn.
* ``gradient_step`` turns the base colour into per-step increments that move
  every channel toward white.
* ``tile_color`` applies ``step * scale`` increments to the base colour.

The hex digest doubles as the colour part of the cache key, so the algorithm
must stay stable across releases.
"""

import math
import zlib
from dataclasses import dataclass
from typing import Union

from grid_avatar.types import RGB, StepIndex

WHITE: RGB = (255, 255, 255)


@dataclass(frozen=True)
class DerivedColor:
    """Base colour of an avatar and the fingerprint it was read from."""

    color_key: str
    r: int
    g: int
    b: int
    alpha: int = 0

    @property
    def rgb(self) -> RGB:
        return (self.r, self.g, self.b)

    @property
    def brightness(self) -> float:
        return (self.r + self.g + self.b) / 3


@dataclass(frozen=True)
class GradientStep:
    """Per-step channel increments, always >= 0."""

    dr: float
    dg: float
    db: float


def checksum(key: Union[str, bytes]) -> str:
    """Return the CRC-32 of ``key`` as 8 lowercase hex digits.

    Text is hashed as UTF-8; lone surrogates are passed through so every
    string has a fingerprint. Bytes are hashed as given.
    """
    data = key if isinstance(key, bytes) else key.encode("utf-8", "surrogatepass")
    return "%08x" % (zlib.crc32(data) & 0xFFFFFFFF)


def from_color_key(color_key: str) -> DerivedColor:
    r, g, b, a = (int(color_key[i : i + 2], 16) for i in range(0, 8, 2))
    return DerivedColor(color_key=color_key, r=r, g=g, b=b, alpha=a)


def derive(key: Union[str, bytes]) -> DerivedColor:
    """Derive the base colour of ``key``. Never fails."""
    return from_color_key(checksum(key))


def gradient_step(color: DerivedColor, side_length: int) -> GradientStep:
    return GradientStep(
        dr=(255 - color.r) / side_length,
        dg=(255 - color.g) / side_length,
        db=(255 - color.b) / side_length,
    )


def _channel(base: int, delta: float, index: StepIndex, scale: float) -> int:
    return max(0, min(255, math.floor(base + delta * index * scale)))


def tile_color(
    color: DerivedColor, step: GradientStep, index: StepIndex, scale: float
) -> RGB:
    """Colour of the tile painted at step ``index`` (15 is the brightest)."""
    return (
        _channel(color.r, step.dr, index, scale),
        _channel(color.g, step.dg, index, scale),
        _channel(color.b, step.db, index, scale),
    )
