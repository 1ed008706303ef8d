# File: app/core/errors.py

"""
Error taxonomy for the HTTP layer and the FastAPI handlers that render it.

Every error response is JSON with an ``error`` label and a human readable
``message``. Store-facing errors echo the backend message as-is; unexpected
failures hide it unless development mode is on.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.middleware import SECURITY_HEADERS

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "The requested resource was not found"
GENERIC_ERROR_MESSAGE = "Something went wrong"


class ServiceError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal server error"

    def __init__(
        self,
        message: str,
        *,
        error: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error is not None:
            self.error = error
        self.extra = extra or {}

    def to_payload(self) -> Dict[str, Any]:
        return {**self.extra, "error": self.error, "message": self.message}


class ValidationError(ServiceError):
    """Bad or missing input. Raised before any store access."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Validation error"


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not found"


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


class StoreError(ServiceError):
    """Any store or connectivity failure other than a uniqueness conflict."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Database error"


class InternalError(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Internal server error"


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    for err in errors:
        if err.get("type") == "value_error":
            return str(err.get("msg", "")).removeprefix("Value error, ")
    for err in errors:
        if err.get("type") == "missing":
            return "Name and email are required"
    if errors:
        return str(errors[0].get("msg", "Invalid request"))
    return "Invalid request"


def install_error_handlers(app: FastAPI, *, development_mode: bool = False) -> None:
    """Register the JSON error handlers on ``app``."""

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s: %s", request.method, request.url.path, exc.error, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        error = ValidationError(_validation_message(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_payload())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # Routes are matched on method and path together, like the unmatched handler
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            error = NotFoundError(NOT_FOUND_MESSAGE)
            return JSONResponse(status_code=error.status_code, content=error.to_payload())
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail), "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        message = str(exc) if development_mode else GENERIC_ERROR_MESSAGE
        error = InternalError(message)
        # Sent by the outermost error middleware, so the header middleware never sees it
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_payload(),
            headers=SECURITY_HEADERS,
        )
