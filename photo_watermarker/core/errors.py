# -*- coding: utf-8 -*-
"""水印批处理的异常层级。

- SetupError：目录准备/列举失败，终止整个运行（退出码 1）
- SkipFile：单个文件被跳过（无拍摄日期、非支持图片），不算错误
- ProcessingError：单个文件处理失败，记录到 stderr 后继续下一个
"""
from __future__ import annotations
from typing import Optional


class WatermarkError(Exception):
    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class SetupError(WatermarkError):
    """致命错误：只在输入/输出目录准备阶段抛出。"""


class InvalidInputError(SetupError):
    pass


class OutputDirError(SetupError):
    pass


class ListingError(SetupError):
    pass


class SkipFile(WatermarkError):
    """跳过当前文件；message 即输出到 stdout 的前缀。"""


class NoDateInfo(SkipFile):
    def __init__(self, original_error: Optional[BaseException] = None):
        super().__init__("Skipping (no date info)", original_error)


class UnsupportedFormat(SkipFile):
    def __init__(self, original_error: Optional[BaseException] = None):
        super().__init__("Skipping (not a supported image)", original_error)


class ProcessingError(WatermarkError):
    """单文件处理失败。"""


class InvalidColorError(ProcessingError):
    pass


class DecodeFailure(ProcessingError):
    pass


class EncodeFailure(ProcessingError):
    pass


class UnknownFormatError(ProcessingError):
    pass
