import uvicorn

from catalog.config import HOST, PORT
from catalog.utils.logging import get_logger

logger = get_logger(__name__)

BANNER = """Product catalog API listening on http://localhost:{port}

  GET    /api/products        list all products
  GET    /api/products/<id>   get a single product
  POST   /api/products        create a product (multipart: name, details, price, productImage)
  PUT    /api/products/<id>   update a product (productImage optional)
  DELETE /api/products/<id>   delete a product
  GET    /uploads/<file>      uploaded images
"""


def main():
    logger.info(BANNER.format(port=PORT))
    uvicorn.run("catalog.main:app", host=HOST, port=PORT)


if __name__ == "__main__":
    main()
