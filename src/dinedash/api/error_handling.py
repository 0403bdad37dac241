from __future__ import annotations

from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dinedash.application.errors import RequestValidationFailedError, RestaurantNotFoundError
from dinedash.application.metrics.analytics import record_validation_failure
from dinedash.application.validation import messages_from_errors

# leading loc entries FastAPI adds to say where a field came from
_REQUEST_SOURCES = {"query", "body", "path", "header", "cookie"}


def _error_response(
    *,
    status_code: int,
    error: str,
    messages: dict[str, list[str]] | None = None,
) -> JSONResponse:
    content: dict[str, Any] = {"error": error}
    if messages is not None:
        content["messages"] = messages
    return JSONResponse(status_code=status_code, content=content)


def _strip_source(error: dict[str, Any]) -> dict[str, Any]:
    loc = tuple(error.get("loc", ()))
    if loc and loc[0] in _REQUEST_SOURCES:
        loc = loc[1:]
    return {**error, "loc": loc}


async def _restaurant_not_found_handler(_: Request, exc: Exception) -> JSONResponse:
    return _error_response(status_code=404, error=RestaurantNotFoundError.public_message)


async def _validation_failed_handler(_: Request, exc: Exception) -> JSONResponse:
    failed = cast(RequestValidationFailedError, exc)
    return _error_response(
        status_code=422,
        error=RequestValidationFailedError.public_message,
        messages=failed.messages,
    )


async def _request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    route = request.scope.get("route")
    record_validation_failure(getattr(route, "path", "unmatched"))
    errors = [_strip_source(dict(error)) for error in validation_exc.errors()]
    return _error_response(
        status_code=422,
        error=RequestValidationFailedError.public_message,
        messages=messages_from_errors(errors),
    )


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    detail = str(http_exc.detail) if http_exc.detail else "Request failed"
    return JSONResponse(
        status_code=http_exc.status_code,
        content={"error": detail},
        headers=getattr(http_exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RestaurantNotFoundError, _restaurant_not_found_handler)
    app.add_exception_handler(RequestValidationFailedError, _validation_failed_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
