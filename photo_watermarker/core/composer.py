# -*- coding: utf-8 -*-
"""水印合成器：负责字体选择、文字测量、位置计算，并把文字直接绘制到图像上。

坐标原点在左上角，y 为文字基线位置。每个文件使用新建的绘制上下文，不共享状态。
"""
from __future__ import annotations
from typing import Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from .colors import resolve_color
from .settings import Position

MARGIN = 20

# 粗体无衬线字体候选；Pillow 会在系统字体目录中查找裸文件名
BOLD_SANS_FONTS = (
    "arialbd.ttf",
    "Arial Bold.ttf",
    "DejaVuSans-Bold.ttf",
    "LiberationSans-Bold.ttf",
    "FreeSansBold.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    "/Library/Fonts/Arial Bold.ttf",
    "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
)

Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]


def load_font(font_size: int) -> Font:
    for name in BOLD_SANS_FONTS:
        try:
            return ImageFont.truetype(name, font_size)
        except OSError:
            continue
    # 找不到系统字体时使用 Pillow 内置字体（FreeType 可用时支持指定字号）
    return ImageFont.load_default(size=font_size)


def measure_text(font: Font, text: str) -> Tuple[int, int]:
    """返回 (文字宽度, ascent)。"""
    if isinstance(font, ImageFont.FreeTypeFont):
        ascent, _descent = font.getmetrics()
        return int(font.getlength(text)), ascent
    left, top, right, bottom = font.getbbox(text)
    return right - left, bottom - top


def _div_trunc(a: int, b: int) -> int:
    # 向零截断（Python 的 // 向下取整，负数时结果不同）
    q = abs(a) // b
    return q if a >= 0 else -q


def compute_position(
    image_w: int,
    image_h: int,
    text_w: int,
    ascent: int,
    mode: Union[Position, str],
) -> Tuple[int, int]:
    """计算文字基线起点 (x, y)。不做越界裁剪，无法识别的 mode 按 BOTTOM_RIGHT 处理。"""
    if mode == Position.TOP_LEFT:
        return MARGIN, ascent + MARGIN
    if mode == Position.CENTER:
        return _div_trunc(image_w - text_w, 2), _div_trunc(image_h + ascent, 2)
    return image_w - text_w - MARGIN, image_h - MARGIN


def draw_watermark(
    image: Image.Image,
    text: str,
    *,
    font_size: int,
    color: str,
    position: Union[Position, str],
) -> Tuple[int, int]:
    """在 image 上原地绘制水印文字，返回基线坐标。

    颜色在此处解析，非法颜色抛出 InvalidColorError。
    """
    fill = resolve_color(color)
    font = load_font(font_size)
    draw = ImageDraw.Draw(image)
    draw.fontmode = "L"  # 抗锯齿
    text_w, ascent = measure_text(font, text)
    x, y = compute_position(image.width, image.height, text_w, ascent, position)
    if isinstance(font, ImageFont.FreeTypeFont):
        draw.text((x, y), text, font=font, fill=fill, anchor="ls")
    else:
        # 位图字体不支持 anchor，换算为左上角坐标
        draw.text((x, y - ascent), text, font=font, fill=fill)
    return x, y
