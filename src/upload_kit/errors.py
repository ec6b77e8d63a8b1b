"""错误类型"""

from enum import Enum
from typing import Any


class Reason(str, Enum):
    """单项操作失败原因"""

    SOURCE_INVALID = "source_invalid"
    WRITE_FAILED = "write_failed"
    DELETE_FAILED = "delete_failed"
    CONFIG_INVALID = "config_invalid"
    REMOTE_FAILED = "remote_failed"


class StorageError(Exception):
    """存储错误基类"""

    reason: Reason = Reason.REMOTE_FAILED

    def __init__(self, message: str, *, key: str = ""):
        super().__init__(message)
        self.message = message
        self.key = key


class SourceInvalidError(StorageError):
    """上传本身带有传输错误，未触达任何后端"""

    reason = Reason.SOURCE_INVALID


class WriteFailedError(StorageError):
    reason = Reason.WRITE_FAILED


class DeleteFailedError(StorageError):
    reason = Reason.DELETE_FAILED


class ConfigInvalidError(StorageError, ValueError):
    """后端配置缺失或非法，构造时抛出"""

    reason = Reason.CONFIG_INVALID


class RemoteOperationFailedError(StorageError):
    """对象存储操作失败

    既包括客户端抛出的异常，也包括请求成功但状态码不在 200-204 之间的情况。
    """

    reason = Reason.REMOTE_FAILED

    def __init__(
        self,
        message: str,
        *,
        key: str = "",
        status_code: int | None = None,
        response: dict[str, Any] | None = None,
    ):
        super().__init__(message, key=key)
        self.status_code = status_code
        self.response = response
