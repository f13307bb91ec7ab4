"""Exception handlers rendering the error envelope."""

import traceback

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from therapist_finder.core.config.settings import settings
from therapist_finder.core.exceptions import TherapistFinderError
from therapist_finder.core.models.api import ErrorDetail, ErrorResponse

logger = structlog.get_logger(__name__)


def error_response(
    status_code: int, message: str, exc: BaseException | None = None
) -> JSONResponse:
    """Build a `{success: false, error}` response.

    The traceback is attached only in development.
    """
    stack = None
    if exc is not None and settings.is_development:
        stack = "".join(traceback.format_exception(exc))
    body = ErrorResponse(error=ErrorDetail(message=message, stack=stack))
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def handle_app_error(request: Request, exc: TherapistFinderError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=type(exc).__name__)
    return error_response(exc.status_code, exc.message, exc)


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = "Route not found" if exc.status_code == 404 else str(exc.detail)
    return error_response(exc.status_code, message, exc)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(400, "Invalid data provided", exc)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path)
    return error_response(500, "Internal server error", exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the envelope handlers to an application."""
    app.add_exception_handler(TherapistFinderError, handle_app_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
