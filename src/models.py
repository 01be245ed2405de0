from __future__ import annotations

from pydantic import BaseModel


class FileEntry(BaseModel):
    filename: str
    path: str
