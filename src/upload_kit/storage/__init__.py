"""统一存储入口

后端在应用启动时构造一次，再显式传给使用方:

    storage = create_storage_from_env()
    media = MediaService(storage)
"""

import os
from typing import Any

from .base import OperationResult, StorageBackend, is_accepted_status
from .batch import BatchExecutor, Operation
from .local import LocalStorage
from .s3 import S3Storage

_BACKENDS: dict[str, type[StorageBackend]] = {
    "local": LocalStorage,
    "s3": S3Storage,
}


def create_storage(backend: str, **kwargs: Any) -> StorageBackend:
    """按名称创建后端，kwargs 透传给后端构造函数"""
    factory = _BACKENDS.get(backend)
    if not factory:
        raise ValueError(f"未知 storage backend: {backend}，可选: {list(_BACKENDS.keys())}")
    return factory(**kwargs)


def create_storage_from_env(**kwargs: Any) -> StorageBackend:
    """根据 UPLOAD_STORAGE_BACKEND 环境变量（默认 local）创建后端"""
    return create_storage(os.environ.get("UPLOAD_STORAGE_BACKEND", "local"), **kwargs)


__all__ = [
    "BatchExecutor",
    "LocalStorage",
    "Operation",
    "OperationResult",
    "S3Storage",
    "StorageBackend",
    "create_storage",
    "create_storage_from_env",
    "is_accepted_status",
]
