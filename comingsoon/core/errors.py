"""Error taxonomy and the handlers that turn it into JSON responses.

Every error body has the same shape: ``{"success": false, "message": ...}``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error. Please try again later."


class AppError(Exception):
    status_code = 500
    default_message = SERVER_ERROR_MESSAGE

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class InvalidEmail(ValidationError):
    default_message = "Please enter a valid email address"


class InvalidInput(ValidationError):
    pass


class Unauthorized(AppError):
    status_code = 401
    default_message = "Unauthorized"


class SessionExpired(Unauthorized):
    default_message = "Session expired"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class StoreError(AppError):
    """A persistence failure. The client only ever sees the generic message."""


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


async def _app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message)


async def _request_validation_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected body for %s: %s", request.url.path, exc.errors())
    return error_response(400, ValidationError.default_message)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == 404 and message == "Not Found":
        message = "Page not found"
    return error_response(exc.status_code, message)


async def _store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(
        "Database error on %s %s", request.method, request.url.path, exc_info=exc
    )
    store_error = StoreError()
    return error_response(store_error.status_code, store_error.message)


async def _unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return error_response(500, SERVER_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, _store_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
