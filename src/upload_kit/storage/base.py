"""存储抽象接口"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..errors import Reason, RemoteOperationFailedError
from ..keys import KeyGenerator
from ..paths import SEPARATOR
from ..upload import UploadRequest

ACCEPTED_STATUS_MIN = 200
ACCEPTED_STATUS_MAX = 204


def is_accepted_status(status_code: int | None) -> bool:
    """状态码在 200-204 之间视为成功"""
    if status_code is None:
        return False
    return ACCEPTED_STATUS_MIN <= status_code <= ACCEPTED_STATUS_MAX


@dataclass
class OperationResult:
    """单项对象存储操作结果

    请求没有抛异常不代表成功，必须检查 `ok`（或调用 `raise_for_status`）。
    """

    key: str
    operation: str
    response: dict[str, Any] | None = None
    reason: Reason | None = None
    exception: BaseException | None = None

    @property
    def status_code(self) -> int | None:
        if not self.response:
            return None
        return self.response.get("ResponseMetadata", {}).get("HTTPStatusCode")

    @property
    def ok(self) -> bool:
        return self.reason is None and is_accepted_status(self.status_code)

    def raise_for_status(self) -> "OperationResult":
        if self.ok:
            return self
        if isinstance(self.exception, RemoteOperationFailedError):
            raise self.exception
        raise RemoteOperationFailedError(
            f"{self.operation} 失败: key={self.key} status={self.status_code} "
            f"reason={self.reason.value if self.reason else 'status'}",
            key=self.key,
            status_code=self.status_code,
            response=self.response,
        ) from self.exception


class StorageBackend(ABC):
    """存储后端接口

    key 生成逻辑通过组合 `KeyGenerator` 共享，后端之间不互相继承。
    """

    keys: KeyGenerator

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend 名称"""

    @abstractmethod
    def store(
        self,
        request: UploadRequest,
        key: str,
        extra_params: dict[str, Any] | None = None,
    ) -> Any:
        """保存单个文件"""

    @abstractmethod
    def stores(
        self,
        requests: Sequence[UploadRequest],
        folder: str = SEPARATOR,
        extra_params: dict[str, Any] | None = None,
    ) -> list[Any]:
        """批量保存，每个文件自动生成 key"""

    @abstractmethod
    def delete(self, key: str) -> Any:
        """删除单个文件"""

    @abstractmethod
    def deletes(self, keys: Sequence[str]) -> list[Any]:
        """批量删除"""

    @abstractmethod
    def get_url(self, key: str) -> str:
        """key 对应的访问地址"""

    def generate_key(self, file: UploadRequest | str, folder: str = SEPARATOR) -> str:
        """为上传文件（或文件名）生成唯一 key"""
        filename = file.name if isinstance(file, UploadRequest) else file
        return self.keys.generate(filename, folder)

    def close(self) -> None:
        """释放资源"""
