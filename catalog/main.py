from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from catalog.config import GZIP_MINIMUM_SIZE, UPLOAD_DIR, UPLOAD_URL_PREFIX
from catalog.database.store import ProductNotFound, ProductStore
from catalog.routes import product
from catalog.services.uploads import ImageUploadHandler, UploadRejected


async def product_not_found_handler(request: Request, exc: ProductNotFound):
    return PlainTextResponse("Product with given id was not found", status_code=404)


async def upload_rejected_handler(request: Request, exc: UploadRejected):
    return PlainTextResponse(exc.message, status_code=exc.status_code)


def create_app(store: Optional[ProductStore] = None, upload_dir: Optional[str] = None) -> FastAPI:
    app = FastAPI(title="Product Catalog API")

    app.state.store = store if store is not None else ProductStore()
    app.state.upload_handler = ImageUploadHandler(upload_dir or UPLOAD_DIR)

    app.add_middleware(GZipMiddleware, minimum_size=GZIP_MINIMUM_SIZE)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ProductNotFound, product_not_found_handler)
    app.add_exception_handler(UploadRejected, upload_rejected_handler)

    app.include_router(product.router)
    app.mount(
        UPLOAD_URL_PREFIX,
        StaticFiles(directory=app.state.upload_handler.directory),
        name="uploads",
    )

    return app


app = create_app()
