# storefront_cart/api/routers/health.py
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront_cart.data.database import get_db
from storefront_cart.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

_STARTED = time.monotonic()


@router.get("")
def health(db: Session = Depends(get_db)):
    body = {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _STARTED, 2),
        "database": {"status": "unknown"},
    }

    try:
        db.execute(text("SELECT 1"))
        body["database"]["status"] = "connected"
        return JSONResponse(status_code=200, content=body)
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        body["status"] = "error"
        body["database"]["status"] = "disconnected"
        body["error"] = str(e)
        return JSONResponse(status_code=503, content=body)
