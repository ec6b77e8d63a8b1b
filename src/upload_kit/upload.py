"""上传请求抽象

由宿主框架构造（multipart 解析后的临时文件或可读流），本库只读不写。
"""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import BinaryIO


class UploadStatus(IntEnum):
    """上传传输状态码"""

    OK = 0
    INI_SIZE = 1
    FORM_SIZE = 2
    PARTIAL = 3
    NO_FILE = 4
    NO_TMP_DIR = 6
    CANT_WRITE = 7
    EXTENSION = 8


@dataclass(frozen=True)
class UploadRequest:
    """一个已接收的上传文件

    `temp_path` 与 `stream` 二选一；两者都提供时优先使用 `temp_path`。
    """

    name: str
    content_type: str = "application/octet-stream"
    size: int = 0
    error: UploadStatus = UploadStatus.OK
    temp_path: Path | None = None
    stream: BinaryIO | None = None

    @property
    def ok(self) -> bool:
        return self.error == UploadStatus.OK and (
            self.temp_path is not None or self.stream is not None
        )

    @contextmanager
    def open(self) -> Iterator[BinaryIO]:
        """打开内容流；调用方传入的 stream 不会被关闭"""
        if self.temp_path is not None:
            with open(self.temp_path, "rb") as f:
                yield f
            return
        if self.stream is None:
            raise FileNotFoundError(f"上传内容不存在: {self.name}")
        yield self.stream
