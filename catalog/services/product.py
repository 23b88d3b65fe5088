# services/product.py
from typing import List, Optional

from catalog.database.store import ProductNotFound, ProductStore
from catalog.models.schemas.product import Product
from catalog.services.validation import (
    ValidationResult,
    validate_product,
    validate_product_update,
)
from catalog.utils.common import generate_product_id
from catalog.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    def __init__(self, store: ProductStore):
        self.store = store

    async def list_all(self) -> List[Product]:
        return self.store.list_all()

    async def get_by_id(self, product_id: str) -> Product:
        try:
            return self.store.find_by_id(product_id)
        except ProductNotFound:
            logger.warning("Product {} not found", product_id)
            raise

    async def create(self, fields: object, image: Optional[str]) -> ValidationResult:
        """
        Validate and append a new product.

        fields: object (request body, normally a dict of text fields)
        image: Optional[str] (stored upload path, None if no image was kept)

        Returns: ValidationResult
            - value: the created Product on success
            - error: the first validation problem otherwise
        """
        if not isinstance(fields, dict):
            return validate_product(fields)

        payload = {key: value for key, value in fields.items() if key != "productImage"}
        if image is not None:
            payload["productImage"] = image

        result = validate_product(payload)
        if not result.ok:
            logger.info("Rejected new product: {}", result.error.message)
            return result

        product = Product(
            id=generate_product_id(),
            name=payload["name"],
            details=payload["details"],
            price=payload["price"],
            productImage=image,
        )
        self.store.insert(product)
        logger.info("Created product {}", product.id)
        return ValidationResult(value=product)

    async def update(self, product_id: str, fields: object, image: Optional[str]) -> ValidationResult:
        """Validate and apply new field values; the image changes only if a new one was stored."""
        await self.get_by_id(product_id)

        result = validate_product_update(fields)
        if not result.ok:
            logger.info("Rejected update of product {}: {}", product_id, result.error.message)
            return result

        try:
            product = self.store.update(product_id, fields, image)
        except ProductNotFound:
            logger.warning("Product {} removed before update", product_id)
            raise
        logger.info("Updated product {}", product_id)
        return ValidationResult(value=product)

    async def delete(self, product_id: str) -> List[Product]:
        try:
            remaining = self.store.remove_by_id(product_id)
        except ProductNotFound:
            logger.warning("Product {} not found", product_id)
            raise
        logger.info("Deleted product {}", product_id)
        return remaining
