"""Map lifecycle errors onto HTTP responses.

404: the order does not exist
409: the order is completed and can no longer change
422: the command failed validation
502: the reservation or payment service failed
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from ordering.order.exceptions import ExternalServiceError

logger = structlog.get_logger(__name__)


def _error(status_code: int, error: str, detail) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "detail": detail})


def _detail(exc: Exception):
    # Only ValidationError carries `messages`; the others hold the {field: [msg]} payload in args
    return exc.args[0] if exc.args else str(exc)


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return _error(404, "not_found", _detail(exc))


async def invalid_operation_handler(request: Request, exc: InvalidOperationError) -> JSONResponse:
    return _error(409, "order_completed", _detail(exc))


async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _error(422, "validation_error", exc.messages)


async def external_service_handler(request: Request, exc: ExternalServiceError) -> JSONResponse:
    logger.error("Upstream service failure", service=exc.service, path=request.url.path, error=exc.message)
    return _error(502, "upstream_failure", {"service": exc.service, "message": exc.message})


def register_error_handlers(app: FastAPI) -> None:
    """Install protean's default handlers, then the lifecycle-specific ones over them."""
    register_exception_handlers(app)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(InvalidOperationError, invalid_operation_handler)
    app.add_exception_handler(ValidationError, validation_handler)
    app.add_exception_handler(ExternalServiceError, external_service_handler)
