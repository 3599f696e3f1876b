# app/core/handlers.py
"""
Exception handlers - every failure leaves the API as the uniform envelope:

    {"success": false, "error": "<message>", "data": <details, optional>}
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.auth import authenticate, bearer_token
from app.core.exceptions import BaseAPIException, field_errors

logger = logging.getLogger(__name__)

# Routers mounted behind get_current_user
GUARDED_PREFIXES = ("/students", "/analytics")


def error_envelope(status_code: int, error: str, data=None) -> JSONResponse:
    content = {"success": False, "error": error}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=status_code, content=content)


# 1. Errors raised by our own services
async def api_exception_handler(request: Request, exc: BaseAPIException):
    return error_envelope(exc.status_code, exc.message, exc.details)


# 2. Request shape errors raised by pydantic before the handler runs.
#    FastAPI parses the body before dependencies, so guarded routes
#    re-check the bearer token here: a bad body never outranks 401/403.
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    if request.url.path.startswith(GUARDED_PREFIXES):
        try:
            authenticate(request, bearer_token(request))
        except BaseAPIException as e:
            return await api_exception_handler(request, e)

    return error_envelope(status.HTTP_400_BAD_REQUEST, "Validation failed", field_errors(exc.errors()))


# 3. Routing errors (unknown URL, wrong method)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_envelope(exc.status_code, str(exc.detail))


# 4. Anything else is a bug; log it, never leak it
async def general_exception_handler(request: Request, exc: Exception):
    logger.critical(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
    return error_envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred"
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAPIException, api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
