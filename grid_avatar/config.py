"""Rendering configuration.

``AvatarConfig`` is a frozen dataclass so a single instance can be shared by
concurrent renders. Defaults reproduce the canonical 80px avatar: a 50pt glyph
rotated by 12 degrees over a gradient whose step multiplier is 3.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any

from grid_avatar.errors import ConfigurationError

GRID_SIZE = 4

DEFAULT_SIDE_LENGTH = 80
DEFAULT_POINT_SIZE = 50
DEFAULT_DPI = 96
DEFAULT_ANGLE = 12.0
DEFAULT_GRADIENT_SCALE = 3.0
DEFAULT_PALETTE_SIZE = 255
DEFAULT_FONT_PATH = os.path.join(
    os.path.dirname(os.path.realpath(__file__)), "assets", "avatar.ttf"
)

FONT_ENV_VAR = "GRID_AVATAR_FONT"
CACHE_DIR_ENV_VAR = "GRID_AVATAR_CACHE_DIR"
DEFAULT_CACHE_DIR = "avatars"


@dataclass(frozen=True)
class AvatarConfig:
    """Visual parameters of a rendered avatar.

    Attributes:
        side_length (int): Canvas side in pixels. Must split into a 4x4 grid of
            integer tiles at least 2px wide (one pixel is eaten by the seam).
        point_size (float): Glyph size in typographic points.
        dpi (int): Resolution used to turn points into pixels. 96 matches the
            GD library the first avatars were produced with.
        angle (float): Counter-clockwise glyph rotation in degrees.
        gradient_scale (float): Step multiplier ``k`` applied to the per-step
            colour deltas. 3 spans the brightness range nicely at 80px; larger
            avatars have historically used 5.
        palette_size (int): Maximum number of palette entries after quantization.
        font_path (str): TrueType font used for the glyph.
    """

    side_length: int = DEFAULT_SIDE_LENGTH
    point_size: float = DEFAULT_POINT_SIZE
    dpi: int = DEFAULT_DPI
    angle: float = DEFAULT_ANGLE
    gradient_scale: float = DEFAULT_GRADIENT_SCALE
    palette_size: int = DEFAULT_PALETTE_SIZE
    font_path: str = DEFAULT_FONT_PATH

    @property
    def tile_size(self) -> int:
        return self.side_length // GRID_SIZE

    @property
    def font_size_px(self) -> int:
        return max(1, int(round(self.point_size * self.dpi / 72.0)))

    def validate(self) -> "AvatarConfig":
        """Raise ``ConfigurationError`` if the parameters cannot be rendered."""
        if not isinstance(self.side_length, int) or self.side_length <= 0:
            raise ConfigurationError(
                f"side_length must be a positive integer, got {self.side_length!r}"
            )
        if self.side_length % GRID_SIZE != 0:
            raise ConfigurationError(
                f"side_length {self.side_length} does not split into a "
                f"{GRID_SIZE}x{GRID_SIZE} grid of integer tiles"
            )
        if self.tile_size < 2:
            raise ConfigurationError(
                f"side_length {self.side_length} leaves no room for tile seams"
            )
        if self.point_size <= 0:
            raise ConfigurationError(
                f"point_size must be positive, got {self.point_size!r}"
            )
        if self.dpi <= 0:
            raise ConfigurationError(f"dpi must be positive, got {self.dpi!r}")
        if self.gradient_scale < 0:
            raise ConfigurationError(
                f"gradient_scale must not be negative, got {self.gradient_scale!r}"
            )
        if not 1 <= self.palette_size <= 255:
            raise ConfigurationError(
                f"palette_size must be within [1, 255], got {self.palette_size!r}"
            )
        return self

    def with_side(self, side_length: int) -> "AvatarConfig":
        return replace(self, side_length=side_length)


def config_from_env(**overrides: Any) -> AvatarConfig:
    """Build a config honouring ``GRID_AVATAR_FONT`` on top of the defaults."""
    font_path = os.environ.get(FONT_ENV_VAR)
    config = AvatarConfig(font_path=font_path) if font_path else AvatarConfig()
    return replace(config, **overrides) if overrides else config


def cache_dir_from_env(default: str = DEFAULT_CACHE_DIR) -> str:
    return os.environ.get(CACHE_DIR_ENV_VAR, default)
