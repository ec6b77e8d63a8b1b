"""业务侧上传辅助

在校验通过后由应用代码调用：生成 key、保存、删除、取 URL，
并统一判断本地与对象存储两种结果是否成功。
"""

import logging
from typing import Any

from .errors import StorageError
from .paths import SEPARATOR
from .storage.base import OperationResult, StorageBackend
from .upload import UploadRequest

logger = logging.getLogger(__name__)


class MediaService:
    """上传辅助服务

    用法:
        media = MediaService(storage)
        user.avatar = media.save(request, "/avatars")
        media.url(user.avatar)
    """

    def __init__(self, storage: StorageBackend):
        self.storage = storage

    def save(self, request: UploadRequest, folder: str = SEPARATOR) -> str | None:
        """保存上传文件，成功返回 key，失败返回 None"""
        key = self.storage.generate_key(request, folder)
        try:
            result = self.storage.store(request, key)
        except StorageError as e:
            logger.warning("上传失败 %s: %s (%s)", request.name, e, e.reason.value)
            return None

        if not self.is_success(result):
            logger.warning("上传失败 %s: 后端返回 %s", request.name, _describe(result))
            return None
        return key

    def remove(self, key: str | None) -> bool:
        """删除文件；key 为空或文件不存在都视为成功"""
        if not key:
            return True
        try:
            result = self.storage.delete(key)
        except StorageError as e:
            logger.warning("删除失败 %s: %s (%s)", key, e, e.reason.value)
            return False

        if isinstance(result, OperationResult) and not self.is_success(result):
            logger.warning("删除失败 %s: 后端返回 %s", key, _describe(result))
            return False
        return True

    def url(self, key: str | None) -> str | None:
        if not key:
            return None
        return self.storage.get_url(key)

    def is_success(self, result: Any) -> bool:
        """判断后端返回是否成功，可在子类中覆盖

        对象存储结果按状态码 200-204 判断，本地存储返回非空 key 即成功。
        """
        if isinstance(result, OperationResult):
            return result.ok
        return bool(result)


def _describe(result: Any) -> str:
    if isinstance(result, OperationResult):
        return f"status={result.status_code}"
    return repr(result)
