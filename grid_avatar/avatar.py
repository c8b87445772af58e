"""High level entry points: key + letter source in, PNG bytes + cache key out."""

from dataclasses import replace
from typing import Optional, Tuple

from loguru import logger

from grid_avatar.cache import AvatarStore
from grid_avatar.color import DerivedColor, derive
from grid_avatar.config import DEFAULT_SIDE_LENGTH, AvatarConfig
from grid_avatar.glyph import Glyph, normalize_letter
from grid_avatar.renderer.avatar import encode, render
from grid_avatar.types import CacheKey


def cache_key(color: DerivedColor, glyph: Glyph, side_length: int) -> CacheKey:
    return f"{color.color_key}_{glyph.char}_{side_length}"


def _resolve(
    raw_key: str,
    raw_letter_source: str,
    side_length: int,
    config: Optional[AvatarConfig],
) -> Tuple[DerivedColor, Glyph, AvatarConfig]:
    config = replace(config or AvatarConfig(), side_length=side_length).validate()
    return derive(raw_key), normalize_letter(raw_letter_source), config


def generate_avatar(
    raw_key: str,
    raw_letter_source: str,
    side_length: int = DEFAULT_SIDE_LENGTH,
    config: Optional[AvatarConfig] = None,
) -> Tuple[bytes, CacheKey]:
    """
    Render the avatar of ``raw_key`` lettered after ``raw_letter_source``.

    Returns the PNG bytes and the key a cache should file them under.
    """
    color, glyph, config = _resolve(raw_key, raw_letter_source, side_length, config)
    return encode(render(color, glyph, config)), cache_key(color, glyph, side_length)


def get_or_create(
    store: AvatarStore,
    raw_key: str,
    raw_letter_source: str,
    side_length: int = DEFAULT_SIDE_LENGTH,
    config: Optional[AvatarConfig] = None,
) -> Tuple[bytes, CacheKey]:
    """
    Like :func:`generate_avatar` but reuses bytes already held by ``store``.
    """
    color, glyph, config = _resolve(raw_key, raw_letter_source, side_length, config)
    key = cache_key(color, glyph, side_length)
    cached = store.get(key)
    if cached is not None:
        logger.info("Avatar cache hit {}", key)
        return cached, key

    logger.info("Avatar cache miss {}", key)
    data = encode(render(color, glyph, config))
    store.put(key, data)
    return data, key
