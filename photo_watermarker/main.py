# -*- coding: utf-8 -*-
"""程序入口模块：解析命令行参数，为目录中的照片批量添加拍摄日期水印。"""
import argparse
import sys
from pathlib import Path

from photo_watermarker.core.errors import SetupError
from photo_watermarker.core.exporter import export_batch
from photo_watermarker.core.image_loader import list_candidate_files, prepare_directories
from photo_watermarker.core.settings import DEFAULT_COLOR, DEFAULT_FONT_SIZE, JobConfig, Position

__version__ = "1.0"


def _positive_int(value):
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value!r}")
    return n


def _position(value):
    try:
        return Position.parse(value)
    except ValueError:
        choices = ", ".join(p.value for p in Position)
        raise argparse.ArgumentTypeError(f"invalid position: {value!r} (choose from {choices})")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="watermarker",
        description="Adds a date watermark to photos based on EXIF data.",
    )
    parser.add_argument("input_directory", type=Path, help="The path to the directory containing images.")
    parser.add_argument("-s", "--font-size", type=_positive_int, default=DEFAULT_FONT_SIZE,
                        help="Font size of the watermark (default: %(default)s).")
    parser.add_argument("-c", "--color", default=DEFAULT_COLOR,
                        help="Color of the watermark (e.g., 'WHITE', 'RED', or hex #RRGGBB).")
    parser.add_argument("-p", "--position", type=_position, default=Position.BOTTOM_RIGHT,
                        metavar="{TOP_LEFT,CENTER,BOTTOM_RIGHT}",
                        help="Position of the watermark (default: BOTTOM_RIGHT).")
    parser.add_argument("-V", "--version", action="version", version=f"Photo Watermarker {__version__}")
    return parser


def parse_config(argv=None):
    args = build_parser().parse_args(argv)
    return JobConfig(
        input_dir=args.input_directory,
        font_size=args.font_size,
        color=args.color,
        position=args.position,
    )


def run(config):
    """执行一次批处理，返回退出码。只有目录准备/列举失败时返回 1。"""
    try:
        input_dir, output_dir = prepare_directories(config.input_dir)
        print(f"Processing files in: {input_dir}")
        print(f"Saving watermarked files to: {output_dir}")
        files = list_candidate_files(input_dir)
    except SetupError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    report = export_batch(files, output_dir, config)
    print(
        f"Watermarked {len(report.watermarked)}, skipped {len(report.skipped)}, "
        f"failed {len(report.failed)} of {report.total} files."
    )
    print("Processing complete.")
    return 0


def main(argv=None):
    return run(parse_config(argv))


if __name__ == "__main__":
    sys.exit(main())
