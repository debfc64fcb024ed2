import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://localhost:8080"),
    "timeout_seconds": float(os.getenv("API_TIMEOUT_SECONDS", "10")),
}

DEBUG = True

DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
