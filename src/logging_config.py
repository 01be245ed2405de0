from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path


FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(
    level: str,
    log_file: Path | str | None,
    max_bytes: int = 1024 * 1024,
    backup_count: int = 3,
) -> None:
    """Configure logging for console and optional file output.

    Parameters
    ----------
    level:
        Log level name (e.g., "INFO", "DEBUG"). Unknown names fall back to INFO.
    log_file:
        If provided, logs are also written to this file, rotated once it
        grows past ``max_bytes`` keeping ``backup_count`` old copies.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backup_count)
        )

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=FORMAT,
        handlers=handlers,
        force=True,
    )
