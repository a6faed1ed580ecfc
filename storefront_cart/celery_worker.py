# storefront_cart/celery_worker.py
from celery import Celery

from storefront_cart.utils.settings import (
    CART_SWEEP_INTERVAL_SECONDS,
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
)

celery_app = Celery(
    "storefront_cart",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# taski trzeba zaimportowac jawnie, inaczej worker ich nie zarejestruje
celery_app.conf.imports = ("storefront_cart.tasks.abandon",)

celery_app.conf.beat_schedule = {
    "abandon-idle-carts": {
        "task": "storefront_cart.tasks.abandon.abandon_stale_carts_task",
        "schedule": CART_SWEEP_INTERVAL_SECONDS,
    },
}

celery_app.conf.timezone = "UTC"
