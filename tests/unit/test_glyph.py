import numpy as np
import pytest
from PIL import Image

from grid_avatar.color import derive
from grid_avatar.config import AvatarConfig
from grid_avatar.errors import ResourceError
from grid_avatar.glyph import (
    DARK_GRAY,
    LIGHT_GRAY,
    Glyph,
    GlyphBox,
    contrast_pair,
    draw_glyph,
    load_font,
    measure,
    normalize_letter,
    placement,
)
from tests.test_utils import BRIGHT_KEY, DARK_KEY, EMPTY_KEY, TIGER_KEY, WHITE_COLOR


@pytest.mark.parametrize(
    "source, expected",
    [
        ("Tiger-222", "T"),
        ("tiger", "T"),
        ("z", "Z"),
        ("A", "A"),
        ("9lives", "*"),
        ("-dash", "*"),
        (" space", "*"),
        ("", "*"),
        ("éclair", "*"),
        ("ßtraße", "*"),
        ("ıi", "*"),
    ],
)
def test_normalize_letter(source: str, expected: str) -> None:
    assert normalize_letter(source) == Glyph(expected)


@pytest.mark.parametrize(
    "key, expected",
    [
        (DARK_KEY, (DARK_GRAY, LIGHT_GRAY)),
        (EMPTY_KEY, (DARK_GRAY, LIGHT_GRAY)),
        (TIGER_KEY, (LIGHT_GRAY, DARK_GRAY)),
        (BRIGHT_KEY, (LIGHT_GRAY, DARK_GRAY)),
    ],
)
def test_contrast_pair_by_brightness(key: str, expected: tuple) -> None:
    assert contrast_pair(derive(key)) == expected


def test_contrast_pair_exact_tones() -> None:
    shadow, fill = contrast_pair(derive(DARK_KEY))
    assert shadow == (33, 33, 33)
    assert fill == (222, 222, 222)


def test_contrast_pair_for_white_background() -> None:
    assert contrast_pair(WHITE_COLOR) == ((222, 222, 222), (33, 33, 33))


def test_placement_centres_bounding_box() -> None:
    box = GlyphBox(corners=((0, 0), (40, 0), (40, -50), (0, -50)))
    assert box.width == 40
    assert box.height == -50
    assert placement(80, box) == (22, 65)


def test_placement_uses_extreme_corners() -> None:
    box = GlyphBox(corners=((1.0, -0.2), (35.2, -7.5), (25.2, -54.4), (-9.0, -47.2)))
    # width = 35.2, height = -54.4
    assert placement(80, box) == (24, 67)


def test_load_font_is_shared() -> None:
    config = AvatarConfig()
    assert load_font(config.font_path, 67) is load_font(config.font_path, 67)


def test_load_font_missing_file(tmp_path) -> None:
    with pytest.raises(ResourceError):
        load_font(str(tmp_path / "missing.ttf"), 67)


def test_load_font_corrupt_file(tmp_path) -> None:
    path = tmp_path / "broken.ttf"
    path.write_bytes(b"this is not a font")
    with pytest.raises(ResourceError):
        load_font(str(path), 67)


def test_measure_unrotated_matches_font_bbox() -> None:
    font = load_font(AvatarConfig().font_path, 67)
    left, top, right, bottom = font.getbbox("T", anchor="ls")
    box = measure(font, "T", 0)
    assert box.width == pytest.approx(right)
    assert box.height == pytest.approx(top)
    assert box.height < 0


def test_measure_rotation_is_counter_clockwise() -> None:
    font = load_font(AvatarConfig().font_path, 67)
    left, top, right, bottom = font.getbbox("T", anchor="ls")
    box = measure(font, "T", 90)
    # A quarter turn counter-clockwise sends the right edge straight up.
    assert box.height == pytest.approx(-right)
    assert box.width == pytest.approx(max(top, bottom))


def test_measure_rotated_glyph_is_taller() -> None:
    font = load_font(AvatarConfig().font_path, 67)
    assert measure(font, "T", 12).height < measure(font, "T", 0).height


@pytest.mark.parametrize("angle", [0, 12])
def test_draw_glyph_paints_fill_color(angle: float) -> None:
    font = load_font(AvatarConfig().font_path, 67)
    canvas = Image.new("RGB", (80, 80), (255, 255, 255))
    box = measure(font, "H", angle)
    draw_glyph(canvas, font, "H", angle, placement(80, box), (33, 33, 33))
    arr = np.array(canvas)
    assert (arr == (33, 33, 33)).all(axis=2).any()
    assert (arr == (255, 255, 255)).all(axis=2).any()


def test_draw_glyph_clips_at_canvas_edge() -> None:
    font = load_font(AvatarConfig().font_path, 67)
    canvas = Image.new("RGB", (80, 80), (255, 255, 255))
    draw_glyph(canvas, font, "W", 12, (-20, 30), (10, 20, 30))
    assert canvas.size == (80, 80)
