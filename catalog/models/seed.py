"""Products present in the catalog when the service starts."""

from catalog.models.schemas.product import Product


def _seed(product_id: str, name: str, price: str) -> Product:
    return Product(
        id=product_id,
        name=name,
        price=price,
        productImage=f"uploads/{name}.webp",
    )


SEED_PRODUCTS = [
    _seed("1", "2023 Cloud9 Official Legacy Summer Jersey", "69"),
    _seed("2", "2023 Cloud9 Official Summer Jersey - CSGO & SSBM Pro Edition", "79"),
    _seed("3", "2023 Cloud9 Official Summer Jersey - League of Legends Edition", "69"),
    _seed("4", "2023 Cloud9 Official Summer Jersey - League of Legends Pro Edition", "79"),
    _seed("5", "2023 Cloud9 Official Summer Jersey - VALORANT Edition", "69"),
    _seed("6", "2023 Cloud9 Official Summer Jersey - VALORANT Pro Edition", "79"),
    _seed("7", "2023 Cloud9 Worlds Jersey - Legacy Edition", "79"),
    _seed("8", "2023 Cloud9 Worlds Jersey - Pro Edition", "89"),
]
