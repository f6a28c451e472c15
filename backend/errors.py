"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class HeadlessError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class WordPressAPIError(HeadlessError):
    def __init__(self, message: str, upstream_status: int | None = None):
        super().__init__(message, status_code=502)
        self.upstream_status = upstream_status


class PostNotFoundError(HeadlessError):
    def __init__(self, slug: str):
        super().__init__(f"Post not found: {slug}", status_code=404)


class OAuthUnavailableError(HeadlessError):
    """WordPress refused to hand out a Google OAuth URL."""


class TwoFactorError(HeadlessError):
    def __init__(self, message: str):
        super().__init__(message, status_code=400)


def _error_body(message: str) -> dict:
    return {"success": False, "message": message}


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(HeadlessError)
    async def handle_headless_error(_request: Request, exc: HeadlessError):
        return JSONResponse(_error_body(str(exc)), status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(_request: Request, exc: StarletteHTTPException):
        return JSONResponse(_error_body(str(exc.detail)), status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError):
        return JSONResponse(_error_body(str(exc)), status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(_error_body("Internal server error"), status_code=500)
