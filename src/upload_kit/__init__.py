"""Upload Kit - 上传文件存储工具包（本地 / S3 兼容对象存储）"""

from .config import Credentials, LocalConfig, ObjectStoreConfig
from .errors import (
    ConfigInvalidError,
    DeleteFailedError,
    Reason,
    RemoteOperationFailedError,
    SourceInvalidError,
    StorageError,
    WriteFailedError,
)
from .keys import KeyGenerator
from .media import MediaService
from .paths import normalize
from .storage import (
    BatchExecutor,
    LocalStorage,
    OperationResult,
    S3Storage,
    StorageBackend,
    create_storage,
    create_storage_from_env,
    is_accepted_status,
)
from .upload import UploadRequest, UploadStatus

__all__ = [
    "BatchExecutor",
    "ConfigInvalidError",
    "Credentials",
    "DeleteFailedError",
    "KeyGenerator",
    "LocalConfig",
    "LocalStorage",
    "MediaService",
    "ObjectStoreConfig",
    "OperationResult",
    "Reason",
    "RemoteOperationFailedError",
    "S3Storage",
    "SourceInvalidError",
    "StorageBackend",
    "StorageError",
    "UploadRequest",
    "UploadStatus",
    "WriteFailedError",
    "create_storage",
    "create_storage_from_env",
    "is_accepted_status",
    "normalize",
]
