"""HTTP mapping for storefront errors.

Registered after Protean's own handlers, so the mapping below wins for the
exceptions it names:

    ObjectNotFoundError    404
    ValidationError        400
    InsufficientStockError 409
    GatewayError           502
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.exceptions import GatewayError, InsufficientStockError

logger = structlog.get_logger(__name__)


def _error_body(exc: Exception) -> dict:
    return {"error": getattr(exc, "messages", str(exc))}


def register_storefront_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content=_error_body(exc))

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content=_error_body(exc))

    @app.exception_handler(InsufficientStockError)
    async def insufficient_stock_handler(request: Request, exc: InsufficientStockError) -> JSONResponse:
        logger.info("Insufficient stock", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=409, content=_error_body(exc))

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
        logger.warning("Gateway error", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=502, content=_error_body(exc))
