"""Shared fixtures: a fresh store and upload directory for every test."""

import os
import tempfile

# Keep import-time side effects (log files, the default upload directory)
# out of the working tree.
os.environ.setdefault("LOG_DIR", "")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="catalog-uploads-"))

import pytest
from fastapi.testclient import TestClient

from catalog.database.store import ProductStore
from catalog.main import create_app

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f"
    b"\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)


@pytest.fixture
def store() -> ProductStore:
    return ProductStore()


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def client(store, upload_dir):
    app = create_app(store=store, upload_dir=str(upload_dir))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def png_file():
    return ("shirt.png", PNG_BYTES, "image/png")
