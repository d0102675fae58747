"""
Terminal error translation for the FastAPI app.

- AppError               -> its own status, envelope with message (+ errors)
- RequestValidationError -> 400 with field-level details
- Starlette HTTPException -> envelope (unmatched routes become 404)
- anything else          -> 500, details only in logs
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import errors, responses

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(errors.AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def validation_details(raw_errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    details = []
    for err in raw_errors:
        # Drop the leading "body"/"query"/"path" location marker.
        loc = [str(part) for part in err.get("loc", ())]
        location = loc[0] if loc else ""
        field = ".".join(loc[1:]) if len(loc) > 1 else location
        details.append({"field": field, "location": location, "message": err.get("msg", "")})
    return details


async def app_error_handler(request: Request, exc: errors.AppError) -> JSONResponse:
    if isinstance(exc, errors.StoreError):
        # Constraint names and driver messages stay server-side.
        logger.warning("store_error path=%s error=%s", request.url.path, exc.message)
        message = type(exc).default_message
    else:
        logger.info("app_error path=%s status=%s error=%s", request.url.path, exc.status_code, exc.message)
        message = exc.message
    return JSONResponse(
        status_code=exc.status_code,
        content=responses.error(message, errors=exc.errors),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = validation_details(list(exc.errors()))
    logger.info("validation_error path=%s fields=%s", request.url.path, [d["field"] for d in details])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=responses.error("Validation error", errors=details),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = "Route not found"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=responses.error(message),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error path=%s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=responses.error("Internal server error"),
    )
