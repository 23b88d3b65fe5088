import os

PORT = int(os.getenv("PORT", "5000"))
HOST = os.getenv("HOST", "0.0.0.0")

GZIP_MINIMUM_SIZE = int(os.getenv("GZIP_MINIMUM_SIZE", "1000"))

# Uploaded product images
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
UPLOAD_URL_PREFIX = "/uploads"
UPLOAD_FIELD_NAME = "productImage"
MAX_UPLOAD_SIZE = 5 * 1024 * 1024  # 5 MiB
# Room for multipart boundaries and the text fields on top of the file itself
MULTIPART_OVERHEAD = 64 * 1024
ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")
