# services/uploads.py
from datetime import datetime, timezone
from pathlib import Path, PurePath
from typing import List, Optional, Sequence

from fastapi import status
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from catalog.config import (
    ALLOWED_IMAGE_TYPES,
    MAX_UPLOAD_SIZE,
    MULTIPART_OVERHEAD,
    UPLOAD_DIR,
    UPLOAD_FIELD_NAME,
)
from catalog.utils.logging import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024


class UploadRejected(Exception):
    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def stored_filename(original: str, now: datetime) -> str:
    """
    Name an uploaded file on disk.

    original: str (filename sent by the client)
    now: datetime (upload time)

    Returns the UTC timestamp with millisecond precision, colons replaced so
    the name is valid on every filesystem, followed by the base name of the
    original file, e.g. `2024-05-01T10-20-30.123Z shirt.png`.
    """
    now = now.astimezone(timezone.utc)
    stamp = now.strftime("%Y-%m-%dT%H:%M:%S") + f".{now.microsecond // 1000:03d}Z"
    return stamp.replace(":", "-") + PurePath(original.replace("\\", "/")).name


class ImageUploadHandler:
    """Accepts at most one product image per request and writes it to disk."""

    def __init__(
        self,
        directory: str = UPLOAD_DIR,
        field_name: str = UPLOAD_FIELD_NAME,
        max_size: int = MAX_UPLOAD_SIZE,
        allowed_types: Sequence[str] = ALLOWED_IMAGE_TYPES,
    ):
        self.directory = directory
        self.field_name = field_name
        self.max_size = max_size
        self.allowed_types = tuple(allowed_types)
        Path(directory).mkdir(parents=True, exist_ok=True)

    def accepts(self, upload: UploadFile) -> bool:
        return upload.content_type in self.allowed_types

    async def handle(self, files: List[tuple]) -> Optional[str]:
        """
        Store the image sent with a request.

        files: list of (field name, UploadFile) pairs found in the form

        Returns the stored path, or None when no file was sent or the file
        type is not accepted. Raises UploadRejected for unexpected fields,
        more than one file, or a file over the size limit.
        """
        if not files:
            return None

        for field_name, _ in files:
            if field_name != self.field_name:
                logger.warning("Rejected upload under unexpected field {}", field_name)
                raise UploadRejected("Unexpected field")
        if len(files) > 1:
            logger.warning("Rejected {} files sent under {}", len(files), self.field_name)
            raise UploadRejected("Unexpected field")

        upload = files[0][1]
        if not self.accepts(upload):
            logger.info("Dropped upload {} of type {}", upload.filename, upload.content_type)
            return None

        return await self.save(upload)

    def check_content_length(self, content_length: Optional[str]) -> None:
        """Refuse a request body that cannot fit under the limit before any of it is parsed."""
        if content_length is None or not content_length.isdigit():
            return
        if int(content_length) > self.max_size + MULTIPART_OVERHEAD:
            logger.warning("Rejected request body of {} bytes", content_length)
            raise UploadRejected("File too large", status.HTTP_413_CONTENT_TOO_LARGE)

    async def save(self, upload: UploadFile) -> str:
        filename = stored_filename(upload.filename or "", datetime.now(timezone.utc))
        destination = Path(self.directory) / filename

        written = 0
        out = await run_in_threadpool(destination.open, "wb")
        try:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > self.max_size:
                    raise UploadRejected("File too large", status.HTTP_413_CONTENT_TOO_LARGE)
                await run_in_threadpool(out.write, chunk)
        except UploadRejected:
            await run_in_threadpool(out.close)
            await run_in_threadpool(destination.unlink, missing_ok=True)
            logger.warning("Rejected upload {}: over {} bytes", upload.filename, self.max_size)
            raise
        finally:
            if not out.closed:
                await run_in_threadpool(out.close)

        logger.info("Stored upload {} ({} bytes)", filename, written)
        return PurePath(self.directory, filename).as_posix()
