# storefront_cart/tasks/abandon.py
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from storefront_cart.celery_worker import celery_app
from storefront_cart.data.database import SessionLocal
from storefront_cart.repos.cart_repo import CartRepo
from storefront_cart.utils.settings import CART_ABANDON_AFTER_SECONDS
from storefront_cart.utils.logging import get_logger

logger = get_logger(__name__)


def abandon_stale_carts(db: Session, now: datetime | None = None, idle_seconds: int | None = None) -> int:
    """ACTIVE koszyki bez zmian dluzej niz idle_seconds -> ABANDONED."""
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(seconds=idle_seconds if idle_seconds is not None else CART_ABANDON_AFTER_SECONDS)

    repo = CartRepo(db)
    try:
        count = repo.abandon_idle_carts(cutoff)
        repo.commit()
    except Exception:
        repo.rollback()
        raise

    logger.info(f"Abandoned {count} carts idle since before {cutoff.isoformat()}")
    return count


@celery_app.task(name="storefront_cart.tasks.abandon.abandon_stale_carts_task")
def abandon_stale_carts_task():
    logger.info("Abandon carts task started")

    db = SessionLocal()
    try:
        return abandon_stale_carts(db)
    finally:
        db.close()
