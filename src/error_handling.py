from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)


class FileExchangeError(Exception):
    """Request-scoped failure rendered as a plain-text HTTP error."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StorageError(FileExchangeError):
    """Filesystem, form parsing, template or encoding failure."""

    status_code = 500

    @classmethod
    def from_exc(cls, exc: BaseException) -> "StorageError":
        return cls(str(exc) or exc.__class__.__name__)


class PathNotAllowed(FileExchangeError):
    """A requested path resolves outside the storage directory."""

    status_code = 400


def log_exception(exc: Exception, *, path: str | None = None) -> None:
    """Записать исключение в лог с опциональным контекстом пути."""
    if isinstance(exc, PathNotAllowed):
        logger.warning("Rejected path %s: %s", path, exc)
    elif path:
        logger.error("Error processing %s", path, exc_info=exc)
    else:
        logger.error("Unhandled exception", exc_info=exc)


async def _file_exchange_error_handler(
    request: Request, exc: FileExchangeError
) -> PlainTextResponse:
    log_exception(exc, path=request.url.path)
    return PlainTextResponse(exc.message, status_code=exc.status_code)


def install_error_handlers(app: FastAPI) -> None:
    """Render every :class:`FileExchangeError` as its status with a text body."""
    app.add_exception_handler(FileExchangeError, _file_exchange_error_handler)


__all__ = [
    "FileExchangeError",
    "StorageError",
    "PathNotAllowed",
    "log_exception",
    "install_error_handlers",
]
