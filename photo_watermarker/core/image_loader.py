# -*- coding: utf-8 -*-
"""输入目录准备与图片加载。

职责：
- 校验输入目录，创建 <输入目录>/<目录名>_watermark 输出目录
- 列出输入目录下的普通文件（不递归，按文件名排序）
- 按文件内容识别格式并解码图片
"""
from __future__ import annotations
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Tuple, Union

from PIL import Image, UnidentifiedImageError

from .errors import (
    DecodeFailure,
    InvalidInputError,
    ListingError,
    OutputDirError,
    UnsupportedFormat,
)

OUTPUT_SUFFIX = "_watermark"

# ImageDraw 可直接写入彩色文字的模式；其余模式先转换
_DRAWABLE_MODES = {"RGB", "RGBA"}


def output_dir_for(input_dir: Path) -> Path:
    # 输出目录位于输入目录内部，而非与之并列
    return input_dir / f"{input_dir.name}{OUTPUT_SUFFIX}"


def prepare_directories(input_dir: Union[str, Path]) -> Tuple[Path, Path]:
    """校验输入目录并创建输出目录，返回 (输入目录, 输出目录) 的绝对路径。"""
    src = Path(input_dir).resolve()
    if not src.is_dir():
        raise InvalidInputError("Provided path is not a directory.")
    out = output_dir_for(src)
    try:
        out.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirError("Could not create output directory.", e) from e
    return src, out


def list_candidate_files(input_dir: Path) -> List[Path]:
    try:
        entries = sorted(input_dir.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise ListingError("Could not list files in the directory.", e) from e
    # 子目录（包括输出目录本身）静默跳过
    return [p for p in entries if p.is_file()]


def _drawable(img: Image.Image) -> Image.Image:
    if img.mode in _DRAWABLE_MODES:
        return img
    has_alpha = "A" in img.getbands() or "transparency" in img.info
    return img.convert("RGBA" if has_alpha else "RGB")


@contextmanager
def open_image(path: Path) -> Iterator[Image.Image]:
    """打开并完整解码图片；离开上下文时释放文件句柄。

    - 内容无法识别为图片：UnsupportedFormat（跳过）
    - 识别成功但解码失败（截断/损坏）：DecodeFailure
    """
    try:
        img = Image.open(path)
    except UnidentifiedImageError as e:
        raise UnsupportedFormat(e) from e
    with img:
        try:
            img.load()
        except (OSError, ValueError, SyntaxError) as e:
            raise DecodeFailure(f"Could not decode image: {e}", e) from e
        yield _drawable(img)
