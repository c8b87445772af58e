import numpy as np
import numpy.typing as npt
from PIL import Image

from grid_avatar.config import GRID_SIZE
from grid_avatar.renderer.avatar import tile_bounds

# Type aliases for clarity
FloatArray = npt.NDArray[np.float64]
UInt8Array = npt.NDArray[np.uint8]
BoolArray = npt.NDArray[np.bool_]


def to_rgb_array(image: Image.Image) -> UInt8Array:
    """
    Return an (H, W, 3) uint8 array of ``image``, resolving palette indices.
    """
    if image.mode != "RGB":
        image = image.convert("RGB")
    return np.array(image, dtype=np.uint8)


def tile_means(image: Image.Image, grid_size: int = GRID_SIZE) -> FloatArray:
    """
    Mean RGB of every tile, as a (grid, grid, 3) array indexed [row, col].
    Seam pixels are excluded.
    """
    arr: UInt8Array = to_rgb_array(image)
    tile = arr.shape[0] // grid_size
    out: FloatArray = np.zeros((grid_size, grid_size, 3), dtype=np.float64)
    for row in range(grid_size):
        for col in range(grid_size):
            x0, y0, x1, y1 = tile_bounds(row, col, tile)
            out[row, col] = arr[y0 : y1 + 1, x0 : x1 + 1].reshape(-1, 3).mean(axis=0)
    return out


def tile_brightness(image: Image.Image, grid_size: int = GRID_SIZE) -> FloatArray:
    """Average channel value of every tile, (grid, grid)."""
    return tile_means(image, grid_size).mean(axis=2)


def seam_mask(side_length: int, grid_size: int = GRID_SIZE) -> BoolArray:
    """
    Boolean (side, side) mask that is True on pixels covered by no tile.
    """
    covered: BoolArray = np.zeros((side_length, side_length), dtype=np.bool_)
    tile = side_length // grid_size
    for row in range(grid_size):
        for col in range(grid_size):
            x0, y0, x1, y1 = tile_bounds(row, col, tile)
            covered[y0 : y1 + 1, x0 : x1 + 1] = True
    return ~covered


def palette_count(image: Image.Image) -> int:
    """
    Number of distinct palette entries actually used by a "P" mode image.
    """
    if image.mode != "P":
        raise ValueError(f"Expected a palette image, got mode {image.mode}")
    used = np.unique(np.array(image, dtype=np.uint8))
    return int(used.size)
