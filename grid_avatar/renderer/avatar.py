import io
from dataclasses import dataclass
from typing import List, Optional, Tuple

from loguru import logger
from PIL import Image, ImageDraw
from pyrsistent import pvector
from pyrsistent.typing import PVector

from grid_avatar.color import (
    WHITE,
    DerivedColor,
    gradient_step,
    tile_color,
)
from grid_avatar.config import GRID_SIZE, AvatarConfig
from grid_avatar.glyph import (
    Glyph,
    contrast_pair,
    draw_glyph,
    load_font,
    measure,
    placement,
)
from grid_avatar.types import PixelBox, StepIndex


@dataclass(frozen=True)
class TileStep:
    row: int
    col: int
    step: StepIndex


def serpentine_order(grid_size: int = GRID_SIZE) -> PVector[TileStep]:
    """
    Tiles in painting order: even rows left to right, odd rows right to left.
    The first tile painted gets the highest step index.
    """
    cells: List[Tuple[int, int]] = []
    for row in range(grid_size):
        cols = range(grid_size) if row % 2 == 0 else reversed(range(grid_size))
        cells.extend((row, col) for col in cols)
    last = len(cells) - 1
    return pvector(
        TileStep(row=row, col=col, step=last - i) for i, (row, col) in enumerate(cells)
    )


TRAVERSAL_ORDER: PVector[TileStep] = serpentine_order()


def _span(index: int, tile: int) -> Tuple[int, int]:
    # Every tile after the first leaves a one pixel white seam before it.
    start = 0 if index == 0 else index * tile + 1
    return start, (index + 1) * tile - 1


def tile_bounds(row: int, col: int, tile: int) -> PixelBox:
    """Inclusive pixel box of the tile at ``(row, col)``."""
    x0, x1 = _span(col, tile)
    y0, y1 = _span(row, tile)
    return x0, y0, x1, y1


def paint_tiles(
    canvas: Image.Image, color: DerivedColor, config: AvatarConfig
) -> Image.Image:
    """Paint the 16 gradient tiles on a white ``canvas``."""
    step = gradient_step(color, config.side_length)
    draw = ImageDraw.Draw(canvas)
    for tile_step in TRAVERSAL_ORDER:
        fill = tile_color(color, step, tile_step.step, config.gradient_scale)
        draw.rectangle(
            tile_bounds(tile_step.row, tile_step.col, config.tile_size), fill=fill
        )
    return canvas


def paint_glyph(
    canvas: Image.Image, color: DerivedColor, glyph: Glyph, config: AvatarConfig
) -> Image.Image:
    """Draw the drop shadow, then the glyph on top of it."""
    font = load_font(config.font_path, config.font_size_px)
    box = measure(font, glyph.char, config.angle)
    x, y = placement(config.side_length, box)
    shadow, fill = contrast_pair(color)
    draw_glyph(canvas, font, glyph.char, config.angle, (x - 1, y - 1), shadow)
    draw_glyph(canvas, font, glyph.char, config.angle, (x, y), fill)
    return canvas


def quantize(image: Image.Image, palette_size: int) -> Image.Image:
    return image.quantize(
        colors=palette_size,
        method=Image.Quantize.MEDIANCUT,
        dither=Image.Dither.NONE,
    )


def render(
    color: DerivedColor, glyph: Glyph, config: Optional[AvatarConfig] = None
) -> Image.Image:
    """
    Renders an avatar as a palette ("P" mode) PIL Image.
    """
    config = (config or AvatarConfig()).validate()
    logger.debug(
        "Rendering avatar {}_{}_{}", color.color_key, glyph.char, config.side_length
    )
    canvas = Image.new("RGB", (config.side_length, config.side_length), WHITE)
    paint_tiles(canvas, color, config)
    paint_glyph(canvas, color, glyph, config)
    return quantize(canvas, config.palette_size)


def encode(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG", optimize=True)
    return buffer.getvalue()


class AvatarRenderer:
    config: AvatarConfig

    def __init__(self, config: Optional[AvatarConfig] = None):
        self.config = (config or AvatarConfig()).validate()

    def render(self, color: DerivedColor, glyph: Glyph) -> Image.Image:
        return render(color, glyph, self.config)

    def render_png(self, color: DerivedColor, glyph: Glyph) -> bytes:
        return encode(self.render(color, glyph))
