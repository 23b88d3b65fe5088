"""Tests for stored file naming and the image upload handler."""

import asyncio
import io
from datetime import datetime, timedelta, timezone

import pytest
from starlette.datastructures import Headers, UploadFile

from catalog.services import uploads
from catalog.services.uploads import ImageUploadHandler, UploadRejected, stored_filename


def _upload(data: bytes, filename: str = "shirt.png", content_type: str = "image/png") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


# ---------------------------------------------------------------------------
# stored_filename
# ---------------------------------------------------------------------------

def test_stored_filename_prefixes_timestamp_without_colons():
    now = datetime(2024, 5, 1, 10, 20, 30, 123456, tzinfo=timezone.utc)
    assert stored_filename("shirt.png", now) == "2024-05-01T10-20-30.123Zshirt.png"


def test_stored_filename_converts_to_utc():
    now = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone(timedelta(hours=2)))
    assert stored_filename("a.jpg", now) == "2024-05-01T10-00-00.000Za.jpg"


def test_stored_filename_strips_directories():
    now = datetime(2024, 5, 1, tzinfo=timezone.utc)
    assert stored_filename("../../etc/passwd", now).endswith("Zpasswd")
    assert stored_filename("C:\\images\\shirt.png", now).endswith("Zshirt.png")


# ---------------------------------------------------------------------------
# ImageUploadHandler
# ---------------------------------------------------------------------------

@pytest.fixture
def handler(tmp_path):
    return ImageUploadHandler(directory=str(tmp_path), max_size=1024)


def test_no_files_means_no_image(handler):
    assert asyncio.run(handler.handle([])) is None


def test_accepted_image_is_written(handler, tmp_path):
    path = asyncio.run(handler.handle([("productImage", _upload(b"png-bytes"))]))

    assert path.startswith(tmp_path.as_posix() + "/")
    assert path.endswith("shirt.png")
    written = list(tmp_path.iterdir())
    assert len(written) == 1
    assert written[0].read_bytes() == b"png-bytes"


@pytest.mark.parametrize("content_type", ["image/gif", "text/plain", "application/pdf"])
def test_unsupported_types_are_dropped(handler, tmp_path, content_type):
    upload = _upload(b"data", "anim.gif", content_type)
    assert asyncio.run(handler.handle([("productImage", upload)])) is None
    assert list(tmp_path.iterdir()) == []


def test_file_over_limit_is_rejected_and_removed(handler, tmp_path):
    with pytest.raises(UploadRejected) as exc_info:
        asyncio.run(handler.handle([("productImage", _upload(b"x" * 1025))]))

    assert exc_info.value.status_code == 413
    assert list(tmp_path.iterdir()) == []


def test_file_at_limit_is_accepted(handler):
    assert asyncio.run(handler.handle([("productImage", _upload(b"x" * 1024))])) is not None


def test_unexpected_field_is_rejected(handler):
    with pytest.raises(UploadRejected) as exc_info:
        asyncio.run(handler.handle([("image", _upload(b"data"))]))
    assert exc_info.value.message == "Unexpected field"
    assert exc_info.value.status_code == 400


def test_more_than_one_file_is_rejected(handler, tmp_path):
    files = [("productImage", _upload(b"a")), ("productImage", _upload(b"b"))]
    with pytest.raises(UploadRejected):
        asyncio.run(handler.handle(files))
    assert list(tmp_path.iterdir()) == []


def test_default_limit_is_five_mebibytes(tmp_path):
    assert ImageUploadHandler(directory=str(tmp_path)).max_size == 5 * 1024 * 1024


def test_file_writes_run_in_threadpool(handler, monkeypatch):
    offloaded = []
    original = uploads.run_in_threadpool

    async def recording(func, *args, **kwargs):
        offloaded.append(getattr(func, "__name__", repr(func)))
        return await original(func, *args, **kwargs)

    monkeypatch.setattr(uploads, "run_in_threadpool", recording)
    asyncio.run(handler.handle([("productImage", _upload(b"png-bytes"))]))

    assert offloaded[0] == "open"
    assert "write" in offloaded
    assert offloaded[-1] == "close"


def test_rejected_file_removal_runs_in_threadpool(handler, monkeypatch):
    offloaded = []
    original = uploads.run_in_threadpool

    async def recording(func, *args, **kwargs):
        offloaded.append(getattr(func, "__name__", repr(func)))
        return await original(func, *args, **kwargs)

    monkeypatch.setattr(uploads, "run_in_threadpool", recording)
    with pytest.raises(UploadRejected):
        asyncio.run(handler.handle([("productImage", _upload(b"x" * 2048))]))

    assert "unlink" in offloaded


@pytest.mark.parametrize("content_length", [None, "", "abc", "0", str(1024 + 64 * 1024)])
def test_content_length_within_allowance_passes(handler, content_length):
    handler.check_content_length(content_length)


def test_content_length_over_allowance_is_rejected(handler):
    with pytest.raises(UploadRejected) as exc_info:
        handler.check_content_length(str(1024 + 64 * 1024 + 1))
    assert exc_info.value.status_code == 413
    assert exc_info.value.message == "File too large"
