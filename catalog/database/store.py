# database/store.py
import threading
from typing import Iterable, List, Optional

from catalog.models.schemas.product import Product
from catalog.models.seed import SEED_PRODUCTS


class ProductNotFound(Exception):
    def __init__(self, product_id: str):
        super().__init__(f"Product {product_id!r} not found")
        self.product_id = product_id


class ProductStore:
    """In-process product collection.

    Records keep insertion order. Every read and write goes through a single
    lock so concurrent requests see the same sequence of operations a single
    worker would.
    """

    def __init__(self, seed: Optional[Iterable[Product]] = None):
        seed = SEED_PRODUCTS if seed is None else seed
        self._products: List[Product] = [product.model_copy() for product in seed]
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def list_all(self) -> List[Product]:
        with self._lock:
            return list(self._products)

    def find_by_id(self, product_id: str) -> Product:
        with self._lock:
            return self._find(product_id)

    def insert(self, product: Product) -> Product:
        with self._lock:
            self._products.append(product)
            return product

    def update(self, product_id: str, fields: dict, image: Optional[str] = None) -> Product:
        """Overwrite name, details and price; replace the image only if one was stored."""
        with self._lock:
            product = self._find(product_id)
            product.name = fields["name"]
            product.details = fields["details"]
            product.price = fields["price"]
            if image is not None:
                product.productImage = image
            return product

    def remove_by_id(self, product_id: str) -> List[Product]:
        """Remove a product and return what is left, in order."""
        with self._lock:
            del self._products[self._index(product_id)]
            return list(self._products)

    def _index(self, product_id: str) -> int:
        for index, product in enumerate(self._products):
            if product.id == product_id:
                return index
        raise ProductNotFound(product_id)

    def _find(self, product_id: str) -> Product:
        return self._products[self._index(product_id)]
