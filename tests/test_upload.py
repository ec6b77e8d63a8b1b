"""UploadRequest 测试"""

import io

import pytest

from upload_kit import UploadRequest, UploadStatus


def test_ok_requires_content():
    assert not UploadRequest(name="a.png").ok
    assert UploadRequest(name="a.png", stream=io.BytesIO(b"x")).ok


def test_transport_error_is_not_ok():
    request = UploadRequest(name="a.png", stream=io.BytesIO(b"x"), error=UploadStatus.PARTIAL)
    assert not request.ok


def test_open_prefers_temp_path(tmp_path):
    temp_path = tmp_path / "upload.tmp"
    temp_path.write_bytes(b"from disk")
    request = UploadRequest(name="a.txt", temp_path=temp_path, stream=io.BytesIO(b"from stream"))

    with request.open() as f:
        assert f.read() == b"from disk"


def test_open_without_content():
    with pytest.raises(FileNotFoundError):
        with UploadRequest(name="a.txt").open():
            pass
