from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

import uvicorn
from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

from config import Settings, config
from error_handling import install_error_handlers
from logging_config import setup_logging
from .routes import files, index, upload

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Собрать приложение FastAPI с таблицей маршрутов."""
    settings = settings or config
    app = FastAPI(title="filedrop")
    app.state.settings = settings
    # the storage directory is fixed against the working directory at startup
    app.state.storage_root = settings.storage_path()
    app.state.templates = Jinja2Templates(directory=settings.templates_dir)

    install_error_handlers(app)

    @app.on_event("startup")
    async def _ensure_storage() -> None:
        root: Path = app.state.storage_root
        root.mkdir(parents=True, exist_ok=True)
        logger.info("Serving files from %s", root)

    # --------- Подключение маршрутов ----------
    app.include_router(index.router)
    app.include_router(upload.router)
    app.include_router(files.router)
    return app


app = create_app()


def main(argv: Sequence[str] | None = None) -> None:
    """Запустить сервер с параметрами из настроек и командной строки."""
    parser = argparse.ArgumentParser(description="filedrop HTTP file exchange server")
    parser.add_argument("--host", default=None, help=f"Bind address (default {config.host})")
    parser.add_argument("--port", type=int, default=None, help=f"Listening port (default {config.port})")
    parser.add_argument("--storage-dir", default=None, help="Directory holding uploaded files")
    parser.add_argument("--log-file", type=Path, default=None, help="Optional log file path")
    args = parser.parse_args(argv)

    overrides = {
        "host": args.host,
        "port": args.port,
        "storage_dir": args.storage_dir,
        "log_file": str(args.log_file) if args.log_file else None,
    }
    settings = config.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )

    setup_logging(
        settings.log_level,
        settings.log_file,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )
    application = create_app(settings)
    logger.info("Server started at %s:%s", settings.host, settings.port)
    uvicorn.run(application, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
