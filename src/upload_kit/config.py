"""后端配置

配置在后端构造时解析一次，之后只读；如需更换（例如轮换密钥）请重新构造后端。

环境变量:
    UPLOAD_WEBROOT: 本地存储的 web 根目录（默认当前目录）
    UPLOAD_BASE_DIR: 本地上传目录（默认 /uploads）
    UPLOAD_BASE_URL: 公开访问地址前缀（可选，CDN 等）
    UPLOAD_S3_REGION: 区域（S3 必需）
    UPLOAD_S3_BUCKET: 默认 bucket（S3 必需）
    UPLOAD_S3_ENDPOINT: 自定义 endpoint（可选，MinIO / R2 等 S3 兼容服务）
    UPLOAD_S3_ACCESS_KEY_ID / UPLOAD_S3_SECRET_ACCESS_KEY / UPLOAD_S3_SESSION_TOKEN: 凭证（可选）
    UPLOAD_S3_ACL: 默认 ACL（默认 public-read）
    UPLOAD_S3_MAX_CONCURRENCY: 批量操作并发数（默认 25）
"""

import os
from dataclasses import dataclass
from typing import Any

from .errors import ConfigInvalidError

DEFAULT_BASE_UPLOAD_DIR = "/uploads"
DEFAULT_ACL = "public-read"
DEFAULT_VERSION = "latest"
DEFAULT_MAX_CONCURRENCY = 25


@dataclass(frozen=True)
class LocalConfig:
    """本地文件系统后端配置"""

    webroot: str = "."
    base_upload_dir: str = DEFAULT_BASE_UPLOAD_DIR
    base_url: str = ""

    @classmethod
    def from_env(cls, **overrides: Any) -> "LocalConfig":
        values: dict[str, Any] = {
            "webroot": os.environ.get("UPLOAD_WEBROOT", "."),
            "base_upload_dir": os.environ.get("UPLOAD_BASE_DIR", DEFAULT_BASE_UPLOAD_DIR),
            "base_url": os.environ.get("UPLOAD_BASE_URL", ""),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass(frozen=True)
class Credentials:
    """访问凭证"""

    key: str
    secret: str
    token: str | None = None

    def __repr__(self) -> str:
        return f"Credentials(key={self.key!r}, secret='***')"


@dataclass(frozen=True)
class ObjectStoreConfig:
    """S3 兼容对象存储配置，region 与 bucket 缺失时立即报错"""

    region: str
    bucket: str
    endpoint: str | None = None
    credentials: Credentials | None = None
    acl: str = DEFAULT_ACL
    base_url: str = ""
    version: str = DEFAULT_VERSION
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY

    def __post_init__(self) -> None:
        if not self.region:
            raise ConfigInvalidError("Region is not set.")
        if not self.bucket:
            raise ConfigInvalidError("Default bucket name is not set.")
        if self.max_concurrency < 1:
            raise ConfigInvalidError(
                f"max_concurrency 必须为正整数: {self.max_concurrency}"
            )

    @property
    def client_kwargs(self) -> dict[str, Any]:
        """转换为 boto3.client("s3", ...) 的参数"""
        kwargs: dict[str, Any] = {"region_name": self.region}
        if self.version and self.version != DEFAULT_VERSION:
            kwargs["api_version"] = self.version
        if self.endpoint:
            kwargs["endpoint_url"] = self.endpoint
        if self.credentials:
            kwargs["aws_access_key_id"] = self.credentials.key
            kwargs["aws_secret_access_key"] = self.credentials.secret
            if self.credentials.token:
                kwargs["aws_session_token"] = self.credentials.token
        return kwargs

    @classmethod
    def from_env(cls, **overrides: Any) -> "ObjectStoreConfig":
        """从环境变量读取，关键字参数覆盖环境变量"""
        credentials = None
        key = os.environ.get("UPLOAD_S3_ACCESS_KEY_ID")
        secret = os.environ.get("UPLOAD_S3_SECRET_ACCESS_KEY")
        if key and secret:
            credentials = Credentials(
                key=key,
                secret=secret,
                token=os.environ.get("UPLOAD_S3_SESSION_TOKEN"),
            )

        raw_concurrency = os.environ.get(
            "UPLOAD_S3_MAX_CONCURRENCY", str(DEFAULT_MAX_CONCURRENCY)
        )
        try:
            max_concurrency = int(raw_concurrency)
        except ValueError as e:
            raise ConfigInvalidError(
                f"UPLOAD_S3_MAX_CONCURRENCY 不是整数: {raw_concurrency}"
            ) from e

        values: dict[str, Any] = {
            "region": os.environ.get("UPLOAD_S3_REGION", ""),
            "bucket": os.environ.get("UPLOAD_S3_BUCKET", ""),
            "endpoint": os.environ.get("UPLOAD_S3_ENDPOINT") or None,
            "credentials": credentials,
            "acl": os.environ.get("UPLOAD_S3_ACL", DEFAULT_ACL),
            "base_url": os.environ.get("UPLOAD_BASE_URL", ""),
            "max_concurrency": max_concurrency,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
