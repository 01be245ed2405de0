from __future__ import annotations

import typing
from pathlib import Path

from fastapi import Request
from starlette.datastructures import FormData, Headers
from starlette.formparsers import MultiPartParser

from config import Settings
from error_handling import StorageError

# Routes registered for every method answer wrong methods themselves.
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

_BODY_METHODS = {"POST", "PUT", "PATCH"}
_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


class SpoolingMultiPartParser(MultiPartParser):
    """Multipart parser with its own in-memory limit per uploaded part."""

    def __init__(
        self,
        headers: Headers,
        stream: typing.AsyncGenerator[bytes, None],
        *,
        spool_max_size: int,
    ) -> None:
        super().__init__(headers, stream)
        self.spool_max_size = spool_max_size


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def storage_root(request: Request) -> Path:
    return request.app.state.storage_root


async def read_upload_form(request: Request) -> FormData:
    """Parse the request body as a form.

    Multipart file parts keep at most ``upload_memory_limit`` bytes in memory
    and spill the rest to a temporary file. Parse failures raise
    :class:`StorageError`.
    """
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("multipart/form-data"):
            parser = SpoolingMultiPartParser(
                request.headers,
                request.stream(),
                spool_max_size=get_settings(request).upload_memory_limit,
            )
            return await parser.parse()
        return await request.form()
    except Exception as exc:
        raise StorageError.from_exc(exc) from exc


async def form_value(request: Request, name: str) -> str:
    """Вернуть значение поля формы: сначала из тела запроса, затем из query.

    Учитываются только urlencoded и multipart тела запросов POST/PUT/PATCH.
    Отсутствующее поле даёт пустую строку.
    """
    content_type = request.headers.get("content-type", "")
    if request.method in _BODY_METHODS and content_type.startswith(_FORM_TYPES):
        form = await read_upload_form(request)
        try:
            value = form.get(name)
        finally:
            await form.close()
        if isinstance(value, str):
            return value
    return request.query_params.get(name, "")
