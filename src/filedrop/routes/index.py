from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response
from jinja2 import TemplateError

from error_handling import StorageError
from ..deps import ALL_METHODS, get_settings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.api_route("/", methods=ALL_METHODS)
async def serve_index(request: Request):
    """Отдать форму загрузки."""
    if request.method != "GET":
        return Response(status_code=400)
    settings = get_settings(request)
    try:
        return request.app.state.templates.TemplateResponse(
            request, settings.index_template
        )
    except (TemplateError, OSError) as exc:
        raise StorageError.from_exc(exc) from exc
