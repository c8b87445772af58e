import pytest

from grid_avatar.color import (
    DerivedColor,
    GradientStep,
    checksum,
    derive,
    from_color_key,
    gradient_step,
    tile_color,
)
from tests.test_utils import (
    BRIGHT_KEY,
    DARK_KEY,
    EMPTY_KEY,
    TIGER_KEY,
    WHITE_COLOR,
)


@pytest.mark.parametrize(
    "key, expected",
    [
        (TIGER_KEY, "c339a385"),
        (BRIGHT_KEY, "d7b7e7a8"),
        (DARK_KEY, "6a3e8cc3"),
        ("a", "e8b7be43"),
        (EMPTY_KEY, "00000000"),
    ],
)
def test_checksum_is_zero_padded_lowercase_crc32(key: str, expected: str) -> None:
    assert checksum(key) == expected


def test_derive_splits_color_key_into_channels() -> None:
    color = derive(TIGER_KEY)
    assert color == DerivedColor(color_key="c339a385", r=195, g=57, b=163, alpha=133)
    assert color.rgb == (195, 57, 163)
    assert color.brightness == pytest.approx(138.333, abs=1e-3)


def test_derive_is_deterministic() -> None:
    assert derive(TIGER_KEY) == derive(TIGER_KEY)
    assert derive("10.0.0.1").color_key == derive("10.0.0.1").color_key


def test_distinct_keys_give_distinct_color_keys() -> None:
    keys = [TIGER_KEY, BRIGHT_KEY, DARK_KEY, "Tiger-223", "192.168.0.1", "alice"]
    assert len({derive(k).color_key for k in keys}) == len(keys)


def test_derive_accepts_non_ascii_keys() -> None:
    color = derive("żółw 🐢")
    assert len(color.color_key) == 8
    assert all(0 <= c <= 255 for c in color.rgb)


def test_from_color_key_parses_alpha_slot() -> None:
    color = from_color_key("0a0b0cff")
    assert (color.r, color.g, color.b, color.alpha) == (10, 11, 12, 255)


def test_gradient_step_moves_toward_white() -> None:
    step = gradient_step(derive(TIGER_KEY), 80)
    assert step == GradientStep(dr=60 / 80, dg=198 / 80, db=92 / 80)
    assert step.dr >= 0 and step.dg >= 0 and step.db >= 0


def test_gradient_step_is_zero_for_white() -> None:
    assert gradient_step(WHITE_COLOR, 80) == GradientStep(0.0, 0.0, 0.0)


@pytest.mark.parametrize(
    "index, expected",
    [
        (15, (228, 168, 214)),
        (3, (201, 79, 173)),
        (0, (195, 57, 163)),
    ],
)
def test_tile_color_floors_shifted_channels(index: int, expected: tuple) -> None:
    color = derive(TIGER_KEY)
    assert tile_color(color, gradient_step(color, 80), index, 3) == expected


def test_tile_color_from_black() -> None:
    color = derive(EMPTY_KEY)
    # 255 / 80 * 15 * 3 = 143.4375
    assert tile_color(color, gradient_step(color, 80), 15, 3) == (143, 143, 143)


def test_tile_color_is_clamped() -> None:
    color = derive(TIGER_KEY)
    step = gradient_step(color, 80)
    assert tile_color(color, step, 15, 100) == (255, 255, 255)
    assert tile_color(color, GradientStep(-50.0, 0.0, 0.0), 15, 3) == (0, 57, 163)


def test_tile_color_brightens_with_step_index() -> None:
    color = derive(DARK_KEY)
    step = gradient_step(color, 80)
    colors = [tile_color(color, step, i, 3) for i in range(16)]
    sums = [sum(c) for c in colors]
    assert sums == sorted(sums)
    assert sums[0] < sums[-1]


def test_derive_accepts_bytes() -> None:
    assert derive(b"Tiger-222") == derive(TIGER_KEY)
    assert checksum(b"\xff\xfe\x00") == checksum(b"\xff\xfe\x00")
    assert len(checksum(b"\xff\xfe\x00")) == 8


def test_derive_accepts_lone_surrogates() -> None:
    color = derive("\ud800abc")
    assert color == derive("\ud800abc")
    assert len(color.color_key) == 8
    assert color.color_key != derive("abc").color_key
