# storefront_cart/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")

CATALOG_BACKEND = os.getenv("CATALOG_BACKEND", "sql").lower()
CATALOG_SERVICE_URL = os.getenv("CATALOG_SERVICE_URL", "http://product-service:8000")
CATALOG_TIMEOUT_SECONDS = float(os.getenv("CATALOG_TIMEOUT_SECONDS", 2))

API_PREFIX = os.getenv("API_PREFIX", "/api/v1")
USER_ID_HEADER = os.getenv("USER_ID_HEADER", "X-User-Id")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/1")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")
CART_ABANDON_AFTER_SECONDS = int(os.getenv("CART_ABANDON_AFTER_SECONDS", 7 * 24 * 60 * 60))
CART_SWEEP_INTERVAL_SECONDS = float(os.getenv("CART_SWEEP_INTERVAL_SECONDS", 60 * 60))
