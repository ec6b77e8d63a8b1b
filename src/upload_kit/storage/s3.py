"""S3 兼容对象存储（AWS S3 / MinIO / Cloudflare R2 等）"""

import logging
import threading
from collections.abc import Sequence
from typing import Any
from urllib.parse import quote, urlsplit

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..config import ObjectStoreConfig
from ..errors import RemoteOperationFailedError, SourceInvalidError
from ..keys import KeyGenerator
from ..paths import SEPARATOR, normalize
from ..upload import UploadRequest
from .base import OperationResult, StorageBackend
from .batch import BatchExecutor, Operation

logger = logging.getLogger(__name__)

PUT_OBJECT = "PutObject"
DELETE_OBJECT = "DeleteObject"


class S3Storage(StorageBackend):
    """S3 兼容对象存储

    客户端在首次使用时创建，之后复用；返回的 OperationResult 必须检查状态码。

    用法:
        storage = S3Storage(ObjectStoreConfig(region="ap-southeast-1", bucket="test"))
        key = storage.generate_key(request, "avatars")
        storage.store(request, key).raise_for_status()
    """

    def __init__(
        self,
        config: ObjectStoreConfig | None = None,
        *,
        keys: KeyGenerator | None = None,
        client: Any = None,
    ):
        self.config = config or ObjectStoreConfig.from_env()
        self.keys = keys or KeyGenerator()
        self.bucket = self.config.bucket
        self.base_url = self.config.base_url.rstrip(SEPARATOR)
        self._client = client
        self._client_lock = threading.Lock()
        self._executor = BatchExecutor(self.config.max_concurrency)

    @property
    def name(self) -> str:
        return "s3"

    @property
    def client(self) -> Any:
        """boto3 S3 客户端，只创建一次"""
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    self._client = boto3.client("s3", **self.config.client_kwargs)
                    logger.debug(
                        "S3 客户端已创建: region=%s endpoint=%s",
                        self.config.region,
                        self.config.endpoint,
                    )
        return self._client

    def get_url(self, key: str) -> str:
        object_key = normalize(key)
        if self.base_url:
            return f"{self.base_url}/{object_key}"

        endpoint = self.client.meta.endpoint_url.rstrip(SEPARATOR)
        quoted = quote(object_key, safe="/~")
        if self.config.endpoint:
            return f"{endpoint}/{self.bucket}/{quoted}"
        parts = urlsplit(endpoint)
        return f"{parts.scheme}://{self.bucket}.{parts.netloc}/{quoted}"

    def store(
        self,
        request: UploadRequest,
        key: str,
        extra_params: dict[str, Any] | None = None,
    ) -> OperationResult:
        object_key = normalize(key)
        response = self._put(request, object_key, extra_params)
        return OperationResult(key=object_key, operation=PUT_OBJECT, response=response)

    def stores(
        self,
        requests: Sequence[UploadRequest],
        folder: str = SEPARATOR,
        extra_params: dict[str, Any] | None = None,
    ) -> list[OperationResult]:
        operations = []
        for request in requests:
            key = self.generate_key(request, folder)
            operations.append(
                Operation(
                    key=key,
                    name=PUT_OBJECT,
                    call=lambda r=request, k=key: self._put(r, k, extra_params),
                )
            )
        return self._executor.run(operations)

    def delete(self, key: str) -> OperationResult:
        object_key = normalize(key)
        response = self._delete(object_key)
        return OperationResult(key=object_key, operation=DELETE_OBJECT, response=response)

    def deletes(self, keys: Sequence[str]) -> list[OperationResult]:
        operations = [
            Operation(key=key, name=DELETE_OBJECT, call=lambda k=key: self._delete(k))
            for key in map(normalize, keys)
        ]
        return self._executor.run(operations)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    def build_put_params(
        self,
        request: UploadRequest,
        key: str,
        extra_params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """PutObject 参数（不含 Body），extra_params 覆盖默认值"""
        params: dict[str, Any] = {
            "Bucket": self.bucket,
            "Key": key,
            "ContentType": request.content_type,
            "ACL": self.config.acl,
        }
        params.update(extra_params or {})
        return params

    def _put(
        self,
        request: UploadRequest,
        key: str,
        extra_params: dict[str, Any] | None,
    ) -> dict[str, Any]:
        if not request.ok:
            raise SourceInvalidError(
                f"上传文件无效: {request.name} (error={int(request.error)})", key=key
            )

        params = self.build_put_params(request, key, extra_params)
        logger.debug("PutObject: %s", params)
        try:
            with request.open() as body:
                response = self.client.put_object(Body=body, **params)
        except (BotoCoreError, ClientError) as e:
            raise _remote_error(PUT_OBJECT, key, e) from e
        except OSError as e:
            raise SourceInvalidError(f"读取上传文件失败: {request.name}: {e}", key=key) from e

        logger.info("S3 上传完成: %s/%s", self.bucket, key)
        return response

    def _delete(self, key: str) -> dict[str, Any]:
        try:
            response = self.client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise _remote_error(DELETE_OBJECT, key, e) from e

        logger.info("S3 删除完成: %s/%s", self.bucket, key)
        return response


def _remote_error(operation: str, key: str, exc: Exception) -> RemoteOperationFailedError:
    response = getattr(exc, "response", None)
    status_code = None
    if response:
        status_code = response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return RemoteOperationFailedError(
        f"{operation} 失败: key={key}: {exc}",
        key=key,
        status_code=status_code,
        response=response,
    )
