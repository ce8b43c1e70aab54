"""
Global exception handlers.

Store failures never reach these handlers: they come back as results and
are rendered as notifications by the routers. What ends up here are auth
and role checks, request validation and unexpected errors.
"""
import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.exceptions import AppException, DataServiceError
from app.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


def _error_body(message: str, details: dict = None) -> dict:
    return ErrorResponse(message=message, details=details or {}).model_dump()


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Handler for application exceptions.

    Args:
        request: FastAPI request
        exc: Application exception

    Returns:
        JSON error response with the exception's status code
    """
    if isinstance(exc, DataServiceError):
        logger.error(f"Data service error on {request.url.path}: {exc.message}")
    elif exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    else:
        logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.details)
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handler for HTTP exceptions raised by FastAPI itself (404, 405...)."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail))
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handler for request validation errors.

    Each error is flattened to its field path, message and type.
    """
    errors = []
    for error in exc.errors():
        errors.append({
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"]
        })

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body("Validation error", {"errors": errors})
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler for uncaught exceptions.

    The exception text is only exposed when DEBUG is on.
    """
    logger.exception(f"Unhandled exception on {request.url.path}: {exc}")

    config = getattr(request.app.state, "config", None)
    debug = bool(config and config.DEBUG)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Internal server error", {"error": str(exc)} if debug else {})
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler in this module to the application."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
