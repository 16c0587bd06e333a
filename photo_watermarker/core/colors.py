# -*- coding: utf-8 -*-
"""水印颜色解析：先匹配固定色板（忽略大小写），再按十六进制 #RRGGBB 解析。"""
from __future__ import annotations
import re
from typing import Dict, Tuple

from PIL import ImageColor

from .errors import InvalidColorError

RGB = Tuple[int, int, int]

PALETTE: Dict[str, RGB] = {
    "WHITE": (255, 255, 255),
    "LIGHT_GRAY": (192, 192, 192),
    "GRAY": (128, 128, 128),
    "DARK_GRAY": (64, 64, 64),
    "BLACK": (0, 0, 0),
    "RED": (255, 0, 0),
    "PINK": (255, 175, 175),
    "ORANGE": (255, 200, 0),
    "YELLOW": (255, 255, 0),
    "GREEN": (0, 255, 0),
    "MAGENTA": (255, 0, 255),
    "CYAN": (0, 255, 255),
    "BLUE": (0, 0, 255),
}
_ALIASES = {"LIGHTGRAY": "LIGHT_GRAY", "DARKGRAY": "DARK_GRAY"}

_HEX_RE = re.compile(r"^(?:#|0[xX])?([0-9a-fA-F]{6})$")


def resolve_color(value: str) -> RGB:
    key = value.strip().upper()
    key = _ALIASES.get(key, key)
    if key in PALETTE:
        return PALETTE[key]
    m = _HEX_RE.match(value.strip())
    if m is None:
        raise InvalidColorError(f"Invalid color: {value!r} (expected a color name or #RRGGBB)")
    return ImageColor.getrgb(f"#{m.group(1)}")
