from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Request, Response
from fastapi.responses import PlainTextResponse
from starlette.datastructures import UploadFile

import storage
from error_handling import StorageError
from ..deps import ALL_METHODS, get_settings, read_upload_form, storage_root

router = APIRouter()

logger = logging.getLogger(__name__)


@router.api_route("/process", methods=ALL_METHODS)
async def process_upload(request: Request):
    """Save the ``file`` part of a multipart form into the storage directory.

    An optional ``alias`` replaces the stored base name while keeping the
    original extension.
    """
    if request.method != "POST":
        return Response(status_code=400)
    settings = get_settings(request)

    form = await read_upload_form(request)

    try:
        upload = form.get("file")
        if not isinstance(upload, UploadFile):
            raise StorageError("no such file: form field 'file' is missing")
        alias = form.get("alias")
        if not isinstance(alias, str):
            alias = ""

        filename = storage.stored_filename(upload.filename or "", alias)
        logger.debug("Received upload %r with alias %r", upload.filename, alias)
        await asyncio.to_thread(
            storage.save_upload,
            storage_root(request),
            filename,
            upload.file,
            settings.confine_paths,
        )
    finally:
        await form.close()

    return PlainTextResponse("done")
