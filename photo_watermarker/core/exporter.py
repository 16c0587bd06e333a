# -*- coding: utf-8 -*-
"""批量导出水印图片。

- 输出文件名与原文件名完全相同，仅目录不同；同名文件直接覆盖
- 输出格式由原文件扩展名决定（最后一个 '.' 之后的部分）
- 单个文件的跳过/失败不会中断整批处理
"""
from __future__ import annotations
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List

from PIL import Image

from .composer import draw_watermark
from .errors import EncodeFailure, SkipFile, UnknownFormatError
from .exif_date import watermark_text_for
from .image_loader import open_image
from .settings import JobConfig

# JPEG 不支持透明通道
_NO_ALPHA_FORMATS = {"JPEG"}


@dataclass
class BatchReport:
    watermarked: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.watermarked) + len(self.skipped) + len(self.failed)


def resolve_output_format(filename: str) -> str:
    """把扩展名映射为 Pillow 的格式名，例如 'a.jpg' -> 'JPEG'。"""
    if "." not in filename:
        raise UnknownFormatError(f"Cannot determine output format: '{filename}' has no extension")
    ext = filename[filename.rfind(".") + 1:]
    fmt = Image.registered_extensions().get(f".{ext.lower()}")
    if fmt is None or fmt not in Image.SAVE:
        raise UnknownFormatError(f"Unsupported output format: '{ext}'")
    return fmt


def save_image(img: Image.Image, target: Path, fmt: str) -> None:
    out = img
    if fmt in _NO_ALPHA_FORMATS and out.mode == "RGBA":
        out = out.convert("RGB")
    try:
        out.save(target, format=fmt)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeFailure(f"Could not write {target.name}: {e}", e) from e


def export_one(path: Path, output_dir: Path, config: JobConfig) -> str:
    """处理单个文件：读取日期 -> 解码 -> 绘制 -> 编码保存。返回水印文本。

    无日期或非图片时抛出 SkipFile 子类，其它失败抛出对应异常。
    """
    text = watermark_text_for(path)
    with open_image(path) as img:
        fmt = resolve_output_format(path.name)
        draw_watermark(
            img,
            text,
            font_size=config.font_size,
            color=config.color,
            position=config.position,
        )
        save_image(img, output_dir / path.name, fmt)
    return text


def export_batch(paths: Iterable[Path], output_dir: Path, config: JobConfig) -> BatchReport:
    """逐个导出，每个文件恰好输出一行结果。"""
    report = BatchReport()
    for p in paths:
        try:
            export_one(p, output_dir, config)
        except SkipFile as e:
            print(f"{e.message}: {p.name}")
            report.skipped.append(p.name)
        except Exception as e:
            print(f"Error processing file {p.name}: {e}", file=sys.stderr)
            report.failed.append(p.name)
        else:
            print(f"Watermarked: {p.name}")
            report.watermarked.append(p.name)
    return report
