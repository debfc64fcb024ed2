import os

SECRET_KEY = "test-secret"

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://backend.test"),
    "timeout_seconds": 2,
}

DEBUG = False
TESTING = True

DEFAULT_PAGE_SIZE = 10

LOG_LEVEL = "WARNING"
