from fastapi import Request

from catalog.database.store import ProductStore
from catalog.services.uploads import ImageUploadHandler


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def get_upload_handler(request: Request) -> ImageUploadHandler:
    return request.app.state.upload_handler
