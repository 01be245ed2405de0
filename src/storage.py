from __future__ import annotations

import base64
import errno
import logging
import os
import shutil
from pathlib import Path
from typing import BinaryIO

from error_handling import PathNotAllowed, StorageError
from models import FileEntry

logger = logging.getLogger(__name__)

FILE_MODE = 0o666
COPY_CHUNK = 1024 * 1024


def stored_filename(original: str, alias: str | None) -> str:
    """Name under which an uploaded file is stored.

    A non-empty ``alias`` replaces the base name and keeps the extension of
    ``original``; otherwise ``original`` is used verbatim.
    """
    if alias:
        return alias + os.path.splitext(original)[1]
    return original


def resolve_in_storage(root: Path, path: str | Path, confine: bool = True) -> Path:
    """Resolve ``path`` against the working directory.

    With ``confine`` set, anything that does not land inside ``root`` is
    rejected with :class:`PathNotAllowed`.
    """
    if not str(path):
        missing = FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), "")
        raise StorageError.from_exc(missing)
    target = Path(path).resolve()
    if confine and not target.is_relative_to(root.resolve()):
        raise PathNotAllowed(f"Path outside storage directory: {path}")
    return target


def save_upload(root: Path, filename: str, stream: BinaryIO, confine: bool = True) -> Path:
    """Write ``stream`` to ``root / filename``, truncating an existing file."""
    target = root / filename
    if confine:
        resolve_in_storage(root, target)
    try:
        fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        with os.fdopen(fd, "wb") as dest:
            shutil.copyfileobj(stream, dest, COPY_CHUNK)
    except OSError as exc:
        raise StorageError.from_exc(exc) from exc
    logger.info("Stored upload %s", target)
    return target


def list_files(root: Path) -> list[FileEntry]:
    """Recursively list every non-directory entry under ``root``."""
    if not root.is_dir():
        raise StorageError(f"Storage directory not found: {root}")

    def _raise(err: OSError) -> None:
        raise err

    entries: list[FileEntry] = []
    try:
        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
            dirnames.sort()
            for name in sorted(filenames):
                entries.append(FileEntry(filename=name, path=os.path.join(dirpath, name)))
    except OSError as exc:
        raise StorageError.from_exc(exc) from exc
    logger.debug("Listed %d files under %s", len(entries), root)
    return entries


def open_for_read(path: Path) -> Path:
    """Check that ``path`` can be opened for reading and return it."""
    try:
        with open(path, "rb"):
            pass
    except OSError as exc:
        raise StorageError.from_exc(exc) from exc
    return path


def read_base64(path: Path) -> str:
    """Read the whole file and return its standard padded base64 encoding."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise StorageError.from_exc(exc) from exc
    return base64.b64encode(data).decode("ascii")


__all__ = [
    "stored_filename",
    "resolve_in_storage",
    "save_upload",
    "list_files",
    "open_for_read",
    "read_base64",
]
