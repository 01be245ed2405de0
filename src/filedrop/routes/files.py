from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, JSONResponse

import storage
from models import FileEntry
from ..deps import ALL_METHODS, form_value, get_settings, storage_root

router = APIRouter()
logger = logging.getLogger(__name__)


@router.api_route("/list-files", methods=ALL_METHODS, response_model=list[FileEntry])
async def list_files(request: Request):
    """Вернуть все файлы хранилища, включая вложенные каталоги."""
    return await asyncio.to_thread(storage.list_files, storage_root(request))


@router.api_route("/download", methods=ALL_METHODS)
async def download_file(request: Request):
    settings = get_settings(request)
    path = await form_value(request, "path")
    target = storage.resolve_in_storage(
        storage_root(request), path, settings.confine_paths
    )
    await asyncio.to_thread(storage.open_for_read, target)
    logger.info("Download %s", target)
    return FileResponse(target, filename=target.name)


@router.api_route("/detail", methods=ALL_METHODS)
async def file_detail(request: Request):
    """Return file content as is, or as a base64 JSON string.

    ``response_type=base64`` is read from the query string only. In that
    branch anything after a literal ``?`` inside ``path`` is dropped.
    """
    settings = get_settings(request)
    root = storage_root(request)
    path = await form_value(request, "path")
    response_type = request.query_params.get("response_type", "")

    if response_type == "base64":
        target = storage.resolve_in_storage(
            root, path.split("?", 1)[0], settings.confine_paths
        )
        encoded = await asyncio.to_thread(storage.read_base64, target)
        logger.info("Detail (base64) %s", target)
        return JSONResponse(encoded)

    target = storage.resolve_in_storage(root, path, settings.confine_paths)
    await asyncio.to_thread(storage.open_for_read, target)
    logger.info("Detail %s", target)
    return FileResponse(target, media_type="application/octet-stream")
