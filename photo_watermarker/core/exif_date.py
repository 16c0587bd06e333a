# -*- coding: utf-8 -*-
"""从 EXIF 读取拍摄时间（DateTimeOriginal）并格式化为 YYYY-MM-DD。"""
from __future__ import annotations
import struct
import warnings
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from PIL import ExifTags, Image

from .errors import NoDateInfo

# EXIF 标准写法为 "YYYY:MM:DD HH:MM:SS"，部分设备省略秒或时间，或使用 '-'
_TIMESTAMP_LAYOUTS = (
    "%Y:%m:%d %H:%M:%S",
    "%Y:%m:%d %H:%M",
    "%Y:%m:%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
)


def parse_exif_timestamp(raw: Union[bytes, str]) -> Optional[datetime]:
    """解析 EXIF 时间字符串；无效值（如 "0000:00:00 00:00:00"）返回 None。"""
    if isinstance(raw, bytes):
        raw = raw.decode("ascii", errors="ignore")
    value = raw.strip("\x00 \t\r\n")
    for layout in _TIMESTAMP_LAYOUTS:
        try:
            return datetime.strptime(value, layout)
        except ValueError:
            continue
    return None


def read_capture_time(path: Union[str, Path]) -> Optional[datetime]:
    """读取 Exif IFD 中的 DateTimeOriginal（JPEG / PNG eXIf / TIFF / WebP）。

    无 EXIF、字段缺失、非图片或元数据损坏时均返回 None。
    Pillow 按文件实际长度读取 IFD，损坏的条目计数不会导致超大内存分配。
    """
    try:
        # 损坏的 EXIF 会触发 "Truncated File Read" 等警告，这里只关心结果
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            with Image.open(path) as img:
                raw = img.getexif().get_ifd(ExifTags.IFD.Exif).get(ExifTags.Base.DateTimeOriginal)
    except (OSError, SyntaxError, ValueError, KeyError, IndexError, TypeError, struct.error):
        return None
    if not raw or not isinstance(raw, (bytes, str)):
        return None
    return parse_exif_timestamp(raw)


def format_watermark_date(moment: datetime) -> str:
    # strftime 的 %Y 在部分平台不补零，这里手动补到四位
    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"


def watermark_text_for(path: Union[str, Path]) -> str:
    moment = read_capture_time(path)
    if moment is None:
        raise NoDateInfo()
    return format_watermark_date(moment)
