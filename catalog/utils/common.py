# utils/common.py
import uuid


def generate_product_id() -> str:
    """Generate an opaque, random product id."""
    return str(uuid.uuid4())
