# -*- coding: utf-8 -*-
"""一次运行的只读配置。"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union


class Position(str, Enum):
    TOP_LEFT = "TOP_LEFT"
    CENTER = "CENTER"
    BOTTOM_RIGHT = "BOTTOM_RIGHT"

    @classmethod
    def parse(cls, value: str) -> "Position":
        """宽松解析：忽略大小写，允许用 '-' 代替 '_'。无法识别时抛出 ValueError。"""
        key = value.strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"unknown position: {value!r}") from None


DEFAULT_FONT_SIZE = 36
DEFAULT_COLOR = "WHITE"


@dataclass(frozen=True)
class JobConfig:
    input_dir: Path
    font_size: int = DEFAULT_FONT_SIZE
    color: str = DEFAULT_COLOR  # 颜色名或十六进制，按文件惰性解析
    # 直接构造时可传入任意字符串；无法识别的值在绘制时按 BOTTOM_RIGHT 处理
    position: Union[Position, str] = Position.BOTTOM_RIGHT

    def __post_init__(self):
        if self.font_size <= 0:
            raise ValueError(f"font size must be positive, got {self.font_size}")
