"""Centralized API error helpers and the standard error envelope.

Every error leaving the API has the shape:

    {"message": str, "code": str}

plus a `details` list for request validation errors.

Provides:
- api_error(...) -> HTTPException whose detail is the envelope
- make_validation_error_response(...) -> envelope for pydantic/FastAPI validation errors
- install_exception_handlers(app) -> renders every error path with the envelope
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

_DEFAULT_CODES = {
    400: "bad_request",
    401: "not_authenticated",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    429: "rate_limited",
    500: "internal_error",
}


def error_payload(code: str, message: str, details: Optional[Any] = None) -> dict:
    payload: dict = {"message": message, "code": code}
    if details is not None:
        payload["details"] = details
    return payload


def api_error(status_code: int, code: str, message: str, details: Optional[Any] = None, headers: Optional[dict] = None) -> HTTPException:
    return HTTPException(status_code=status_code, detail=error_payload(code, message, details), headers=headers)


def make_validation_error_response(errors: Any) -> dict:
    # Only keep the serializable parts; `ctx` may hold exception instances
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in errors
    ]
    return jsonable_encoder(error_payload("validation_error", "Validation error", details))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict) and "code" in detail and "message" in detail:
        content = detail
    else:
        content = error_payload(_DEFAULT_CODES.get(exc.status_code, "error"), str(detail))
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=make_validation_error_response(exc.errors()))


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit exceeded for %s on %s", request.client.host if request.client else None, request.url.path)
    return JSONResponse(status_code=status.HTTP_429_TOO_MANY_REQUESTS, content=error_payload("rate_limited", "Rate limit exceeded"))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_payload("internal_error", INTERNAL_ERROR_MESSAGE))


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = [
    "INTERNAL_ERROR_MESSAGE",
    "api_error",
    "error_payload",
    "make_validation_error_response",
    "install_exception_handlers",
]
