"""Uniform JSON error envelope for every handler-level failure."""

from __future__ import annotations

import traceback
from typing import TYPE_CHECKING, Any

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskboard.core.config import settings
from taskboard.core.errors import ApiError, DuplicateError
from taskboard.core.logging import get_logger
from taskboard.schemas.common import FIELD_ERROR, ErrorRead

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = get_logger(__name__)


def _error_payload(message: str, exc: BaseException) -> dict[str, Any]:
    stack = None if settings.is_production else "".join(traceback.format_exception(exc))
    return ErrorRead(message=message, stack=stack).model_dump(exclude_none=True)


def error_response(status_code: int, message: str, exc: BaseException) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=_error_payload(message, exc))


def _validation_message(exc: RequestValidationError) -> str:
    messages: list[str] = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in {"body", "query", "path"}]
        text = str(error.get("msg", "Invalid value"))
        if error.get("type") == FIELD_ERROR or not loc:
            messages.append(text)
        else:
            messages.append(f"{'.'.join(loc)}: {text}")
    return ", ".join(messages) or "Invalid request"


async def _handle_api_error(_request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("request.failed status=%s message=%s", exc.status_code, exc.message)
    return error_response(exc.status_code, exc.message, exc)


async def _handle_request_validation(
    _request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, _validation_message(exc), exc)


async def _handle_integrity_error(_request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("db.integrity_error error=%s", str(exc).splitlines()[0] if str(exc) else exc)
    return error_response(DuplicateError.status_code, DuplicateError.default_message, exc)


async def _handle_http_exception(
    _request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    response = error_response(exc.status_code, message, exc)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "request.unhandled_error method=%s path=%s error_type=%s",
        request.method,
        request.url.path,
        exc.__class__.__name__,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server Error", exc)


def install_error_handling(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _handle_api_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(IntegrityError, _handle_integrity_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    app.add_exception_handler(Exception, _handle_unexpected)
