# routes/product.py
import json
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.datastructures import UploadFile

from catalog.database.dependencies import get_store, get_upload_handler
from catalog.database.store import ProductStore
from catalog.models.schemas.product import Product
from catalog.services.product import ProductService
from catalog.services.uploads import ImageUploadHandler

router = APIRouter(prefix="/api/products", tags=["products"])


class InvalidBody(Exception):
    pass


async def _read_body(request: Request) -> Tuple[object, List[tuple]]:
    """Split a JSON or form request into its text fields and uploaded files."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            return await request.json(), []
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidBody() from e

    form = await request.form()
    fields = {}
    files = []
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            files.append((key, value))
        else:
            fields[key] = value
    return fields, files


async def _parse_product_request(
    request: Request, uploads: ImageUploadHandler
) -> Tuple[object, Optional[str]]:
    # The image is stored before lookup and validation run
    uploads.check_content_length(request.headers.get("content-length"))
    fields, files = await _read_body(request)
    image = await uploads.handle(files)
    return fields, image


@router.get("", response_model=List[Product], response_model_exclude_none=True)
async def list_products(store: ProductStore = Depends(get_store)):
    """List every product in insertion order."""
    service = ProductService(store)
    return await service.list_all()


@router.get("/{product_id}", response_model=Product, response_model_exclude_none=True)
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    """Get a specific product by ID."""
    service = ProductService(store)
    return await service.get_by_id(product_id)


@router.post("", response_model=Product, response_model_exclude_none=True)
async def create_product(
    request: Request,
    store: ProductStore = Depends(get_store),
    uploads: ImageUploadHandler = Depends(get_upload_handler),
):
    """Create a product from its fields and an uploaded image."""
    try:
        fields, image = await _parse_product_request(request, uploads)
    except InvalidBody:
        return PlainTextResponse("Invalid JSON body", status_code=status.HTTP_400_BAD_REQUEST)

    service = ProductService(store)
    result = await service.create(fields, image)
    if not result.ok:
        return JSONResponse(result.error.to_dict(), status_code=status.HTTP_400_BAD_REQUEST)

    return result.value


@router.put("/{product_id}", response_model=Product, response_model_exclude_none=True)
async def update_product(
    product_id: str,
    request: Request,
    store: ProductStore = Depends(get_store),
    uploads: ImageUploadHandler = Depends(get_upload_handler),
):
    """Update an existing product, replacing its image only if a new one is sent."""
    try:
        fields, image = await _parse_product_request(request, uploads)
    except InvalidBody:
        return PlainTextResponse("Invalid JSON body", status_code=status.HTTP_400_BAD_REQUEST)

    service = ProductService(store)
    result = await service.update(product_id, fields, image)
    if not result.ok:
        return JSONResponse(result.error.to_dict(), status_code=status.HTTP_400_BAD_REQUEST)

    return result.value


@router.delete("/{product_id}", response_model=List[Product], response_model_exclude_none=True)
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    """Delete a product and return the remaining catalog."""
    service = ProductService(store)
    return await service.delete(product_id)
