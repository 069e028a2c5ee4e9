"""Translate service failures into JSON error responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..domain.errors import AccountError, Internal

logger = logging.getLogger(__name__)


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "Failure", "message": message})


async def account_error_handler(request: Request, exc: AccountError) -> JSONResponse:
    """Render a known failure with its own status and message."""
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "URL: %s | Status: %s | Message: %s",
            request.url.path,
            exc.status_code,
            exc.message,
            exc_info=exc,
        )
        return _failure(exc.status_code, Internal.default_message)
    logger.info("URL: %s | Status: %s | Message: %s", request.url.path, exc.status_code, exc.message)
    return _failure(exc.status_code, exc.message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures with request context and hide their detail."""
    logger.error(
        "URL: %s | Status: %s | Message: %s",
        request.url.path,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        exc,
        exc_info=exc,
    )
    return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, Internal.default_message)


def install_error_handlers(app: FastAPI) -> None:
    """Register the account error handlers on ``app``."""
    app.add_exception_handler(AccountError, account_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
