from dataclasses import replace
import io

import streamlit as st
from PIL import Image

from grid_avatar.avatar import get_or_create
from grid_avatar.cache import MemoryStore
from grid_avatar.color import derive
from grid_avatar.config import AvatarConfig, config_from_env
from grid_avatar.errors import AvatarError
from grid_avatar.glyph import contrast_pair, normalize_letter
from grid_avatar.utils.image import palette_count, tile_brightness

SIDE_OPTIONS = [40, 80, 120, 160, 240]

st.set_page_config(layout="wide", page_title="Grid Avatar")

if "store" not in st.session_state:
    st.session_state["store"] = MemoryStore()


def get_config_from_widgets(base: AvatarConfig) -> AvatarConfig:
    side_length = st.select_slider(
        "Side length (px)", options=SIDE_OPTIONS, value=base.side_length
    )
    point_size = st.slider("Point size", 10, 120, int(base.point_size))
    angle = st.slider("Angle (degrees)", -45.0, 45.0, float(base.angle), step=1.0)
    gradient_scale = st.slider(
        "Gradient scale", 0.0, 10.0, float(base.gradient_scale), step=0.5
    )
    palette_size = st.slider("Palette size", 2, 255, base.palette_size)
    return replace(
        base,
        side_length=side_length,
        point_size=point_size,
        angle=angle,
        gradient_scale=gradient_scale,
        palette_size=palette_size,
    )


# --------- Main App ---------

tab_avatar, tab_config = st.tabs(["Avatar", "Config"])

with tab_config:
    config: AvatarConfig = get_config_from_widgets(config_from_env())
    st.session_state["config"] = config

with tab_avatar:
    left_col, right_col = st.columns([0.5, 0.5])

    with left_col:
        key = st.text_input("Key", value="Tiger-222")
        letter_source = st.text_input("Letter", value=key)

    with right_col:
        config = st.session_state["config"]
        try:
            data, cache_key = get_or_create(
                st.session_state["store"],
                key,
                letter_source,
                side_length=config.side_length,
                config=config,
            )
        except AvatarError as e:
            st.error(str(e))
        else:
            image = Image.open(io.BytesIO(data))
            st.image(data, width=max(config.side_length, 160))
            st.code(cache_key)

            color = derive(key)
            shadow, glyph_fill = contrast_pair(color)
            st.json(
                {
                    "base_rgb": color.rgb,
                    "brightness": round(color.brightness, 1),
                    "glyph": normalize_letter(letter_source).char,
                    "shadow": shadow,
                    "fill": glyph_fill,
                    "palette_entries": palette_count(image),
                    "bytes": len(data),
                }
            )
            st.dataframe(tile_brightness(image).round(1))
