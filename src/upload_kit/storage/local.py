"""本地文件系统存储"""

import logging
import os
import shutil
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..config import LocalConfig
from ..errors import DeleteFailedError, SourceInvalidError, StorageError, WriteFailedError
from ..keys import KeyGenerator
from ..paths import SEPARATOR, normalize
from ..upload import UploadRequest
from .base import StorageBackend

logger = logging.getLogger(__name__)


class LocalStorage(StorageBackend):
    """保存到 web 根目录下的上传目录

    用法:
        storage = LocalStorage(LocalConfig(webroot="/srv/www"))
        key = storage.generate_key(request, "avatars")
        storage.store(request, key)
        storage.get_url(key)  # /uploads/avatars/xxx.png
    """

    def __init__(
        self,
        config: LocalConfig | None = None,
        *,
        keys: KeyGenerator | None = None,
    ):
        self.config = config or LocalConfig.from_env()
        self.keys = keys or KeyGenerator()
        self.upload_dir = normalize(self.config.base_upload_dir, confine=True)
        self.root = Path(self.config.webroot).resolve() / normalize(
            self.config.base_upload_dir
        )
        self._base_url = self.config.base_url.rstrip(SEPARATOR)

    @property
    def name(self) -> str:
        return "local"

    def path_for(self, key: str) -> Path:
        """key 对应的绝对路径，始终位于 root 之内"""
        relative = normalize(key)
        return self.root / relative if relative else self.root

    def get_url(self, key: str) -> str:
        upload_dir = "" if self.upload_dir == SEPARATOR else self.upload_dir
        return f"{self._base_url}{upload_dir}{normalize(key, confine=True)}"

    def store(
        self,
        request: UploadRequest,
        key: str,
        extra_params: dict[str, Any] | None = None,
    ) -> str:
        """保存文件，成功返回原 key

        extra_params 仅为接口一致而保留，本地存储不使用。
        """
        if not request.ok:
            raise SourceInvalidError(
                f"上传文件无效: {request.name} (error={int(request.error)})", key=key
            )

        target = self.path_for(key)
        if target == self.root:
            raise WriteFailedError(f"key 为空，无法写入: {key!r}", key=key)
        tmp_path: Path | None = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            # 失败时保留 target 原有内容
            with request.open() as src, tempfile.NamedTemporaryFile(
                "wb", dir=target.parent, prefix=f".{target.name}.", delete=False
            ) as dst:
                tmp_path = Path(dst.name)
                shutil.copyfileobj(src, dst)
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, target)
        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise WriteFailedError(f"写入失败: {target}: {e}", key=key) from e

        logger.info("本地保存完成: %s", target)
        return key

    def stores(
        self,
        requests: Sequence[UploadRequest],
        folder: str = SEPARATOR,
        extra_params: dict[str, Any] | None = None,
    ) -> list[str]:
        """批量保存，只返回成功的 key，失败项仅记录日志"""
        stored: list[str] = []
        for request in requests:
            key = self.generate_key(request, folder)
            try:
                stored.append(self.store(request, key))
            except StorageError as e:
                logger.warning("本地保存跳过 %s: %s (%s)", request.name, e, e.reason.value)
        return stored

    def delete(self, key: str) -> str | None:
        """删除文件

        Returns:
            删除成功返回 key；文件本不存在返回 None（不视为错误）
        """
        target = self.path_for(key)
        if target == self.root:
            return None
        try:
            target.unlink()
        except FileNotFoundError:
            logger.debug("本地文件不存在，无需删除: %s", target)
            return None
        except OSError as e:
            raise DeleteFailedError(f"删除失败: {target}: {e}", key=key) from e

        logger.info("本地删除完成: %s", target)
        return key

    def deletes(self, keys: Sequence[str]) -> list[str]:
        """批量删除，返回实际删除的 key（保持输入顺序）"""
        deleted: list[str] = []
        for key in keys:
            try:
                if self.delete(key):
                    deleted.append(key)
            except DeleteFailedError as e:
                logger.warning("本地删除跳过 %s: %s", key, e)
        return deleted
