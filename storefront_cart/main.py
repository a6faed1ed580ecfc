# storefront_cart/main.py
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request

from storefront_cart.api.errors import register_error_handlers
from storefront_cart.api.routers import carts, health
from storefront_cart.data.database import init_db
from storefront_cart.utils import settings
from storefront_cart.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database...")
    init_db()
    logger.info("Database tables ready")
    yield


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Storefront Cart Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        if not request.url.path.endswith("/health"):
            duration_ms = (time.perf_counter() - start) * 1000
            logger.info(f"{request.method} {request.url.path} - {response.status_code} {duration_ms:.0f}ms")
        return response

    register_error_handlers(app)

    # Include routers
    app.include_router(health.router, prefix=settings.API_PREFIX)
    app.include_router(carts.router, prefix=settings.API_PREFIX)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
