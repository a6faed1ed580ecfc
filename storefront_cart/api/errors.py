# storefront_cart/api/errors.py
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront_cart.domain.errors import CartError, NotFoundError, ValidationError
from storefront_cart.utils.logging import get_logger

logger = get_logger(__name__)

#mapowanie po typie, kazda podklasa CartError musi tu byc
STATUS_BY_ERROR: dict[type[CartError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
}

HTTP_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    429: "RATE_LIMIT_EXCEEDED",
}


def _error_response(status_code: int, message: str, code: str, details=None) -> JSONResponse:
    body = {"status": "error", "message": message, "code": code}
    if details:
        body["details"] = jsonable_encoder(details)
    return JSONResponse(status_code=status_code, content=body)


def status_for(exc: CartError) -> int:
    for error_type, status_code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status_code
    raise TypeError(f"Unmapped cart error type: {type(exc).__name__}")


async def cart_error_handler(request: Request, exc: CartError) -> JSONResponse:
    status_code = status_for(exc)
    logger.warning(
        f"{request.method} {request.url.path} -> {status_code} {exc.code}: {exc.message} {exc.details or ''}"
    )
    return _error_response(status_code, exc.message, exc.code, exc.details)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} -> 400 VALIDATION_ERROR")
    return _error_response(400, "Validation Error", "VALIDATION_ERROR", exc.errors())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = HTTP_CODES.get(exc.status_code, "HTTP_ERROR")
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    return _error_response(exc.status_code, str(exc.detail), code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} -> 500: {exc}", exc_info=exc)
    return _error_response(500, "Something went wrong", "INTERNAL_SERVER_ERROR")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CartError, cart_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
