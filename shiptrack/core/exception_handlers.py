"""Exception handlers: every error leaves the API as

    {"error": <code>, "message": <text>, "details": <object>}

Domain errors are mapped to a status by error_code; 401 responses carry a
Bearer challenge; store outages (503) and unhandled errors are logged.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shiptrack.core.config import get_settings
from shiptrack.domain.exceptions import ShiptrackException

logger = logging.getLogger(__name__)

ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "INVALID_TRANSITION": 400,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "CONFLICT": 409,
    "STORE_UNAVAILABLE": 503,
}

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def _error_response(
    status_code: int,
    error: str,
    message: Any,
    details: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    content: dict[str, Any] = {"error": error, "message": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _handle_domain_error(request: Request, exc: ShiptrackException) -> JSONResponse:
    status_code = ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status_code >= 500:
        logger.error(
            "%s %s failed: %s %s", request.method, request.url.path, exc.message, exc.details
        )
    return _error_response(
        status_code,
        exc.error_code,
        exc.message,
        exc.details,
        _BEARER_CHALLENGE if status_code == 401 else None,
    )


def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(
        422, "VALIDATION_ERROR", "Request validation failed", jsonable_encoder(exc.errors())
    )


def _handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(
        exc.status_code, "HTTP_ERROR", exc.detail, headers=getattr(exc, "headers", None)
    )


def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return _error_response(500, "INTERNAL_ERROR", message)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers above on app. Call once from create_app()."""
    app.add_exception_handler(ShiptrackException, _handle_domain_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, _handle_http_error)
    app.add_exception_handler(Exception, _handle_unexpected)
