"""JSON error responses for the search API.

Every error body has the shape ``{"error": CODE, "message": str, ...}`` plus
the request id, so a client report can be matched to the server log line.
Domain exceptions map to a status by error_code; anything unmapped is a 400.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from leaddesk.core.config import get_settings
from leaddesk.domain.exceptions import LeadDeskException

logger = logging.getLogger(__name__)

ERROR_CODE_STATUS: dict[str, int] = {
    "AUTHENTICATION_ERROR": 401,
    "CALLER_NOT_FOUND": 404,
    "VALIDATION_ERROR": 400,
    "SERVICE_UNAVAILABLE": 503,
}


def _error_response(
    request: Request,
    status_code: int,
    body: dict[str, Any],
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        body = {**body, "requestId": request_id}
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def _leaddesk_exception_handler(request: Request, exc: LeadDeskException) -> JSONResponse:
    status_code = ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status_code >= 500:
        logger.error("%s: %s", exc.error_code, exc.message)
    # RFC 6750: 401 challenges name the bearer scheme.
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return _error_response(request, status_code, exc.to_dict(), headers)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error_response(
        request,
        422,
        {
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(
        request,
        exc.status_code,
        {"error": "HTTP_ERROR", "message": exc.detail},
        getattr(exc, "headers", None),
    )


def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """500; the exception text is only exposed with debug on."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return _error_response(request, 500, {"error": "INTERNAL_ERROR", "message": message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LeadDeskException, _leaddesk_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
