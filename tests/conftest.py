import threading
import time
from collections.abc import Callable
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

from upload_kit import UploadRequest, UploadStatus


class FakeS3Client:
    """记录调用的 S3 客户端替身，按 key 决定状态码 / 异常 / 延迟"""

    def __init__(
        self,
        *,
        endpoint_url: str = "https://s3.ap-southeast-1.amazonaws.com",
        status_for: Callable[[str], int] = lambda key: 200,
        error_for: Callable[[str], Exception | None] = lambda key: None,
        delay_for: Callable[[str], float] = lambda key: 0.0,
    ):
        self.meta = SimpleNamespace(endpoint_url=endpoint_url)
        self.status_for = status_for
        self.error_for = error_for
        self.delay_for = delay_for
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False
        self._lock = threading.Lock()

    def _respond(self, operation: str, params: dict[str, Any]) -> dict[str, Any]:
        key = params["Key"]
        time.sleep(self.delay_for(key))
        with self._lock:
            self.calls.append((operation, params))
        error = self.error_for(key)
        if error is not None:
            raise error
        return {"ResponseMetadata": {"HTTPStatusCode": self.status_for(key)}}

    def put_object(self, **params: Any) -> dict[str, Any]:
        params["Body"] = params["Body"].read()
        return self._respond("PutObject", params)

    def delete_object(self, **params: Any) -> dict[str, Any]:
        return self._respond("DeleteObject", params)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_request(tmp_path: Path) -> Callable[..., UploadRequest]:
    """在临时目录写入内容并返回 UploadRequest"""
    incoming = tmp_path / "incoming"
    incoming.mkdir()
    counter = iter(range(10_000))

    def _make(
        name: str = "photo.png",
        content: bytes = b"data",
        *,
        content_type: str = "image/png",
        error: UploadStatus = UploadStatus.OK,
    ) -> UploadRequest:
        temp_path = incoming / f"php{next(counter)}.tmp"
        temp_path.write_bytes(content)
        return UploadRequest(
            name=name,
            content_type=content_type,
            size=len(content),
            error=error,
            temp_path=temp_path,
        )

    return _make


@pytest.fixture
def fake_client_cls() -> type[FakeS3Client]:
    return FakeS3Client
