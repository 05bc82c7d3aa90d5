"""Local filesystem storage."""

from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path
from typing import List

from .base import RepositoryStorage

log = logging.getLogger(__name__)


class FilesystemStorage(RepositoryStorage):
    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def local_path(self, path: str) -> Path:
        relative = path.replace("\\", "/").lstrip("/")
        target = (self.root / relative).resolve()
        if target != self.root and self.root not in target.parents:
            raise ValueError(f"Path escapes repository root: {path}")
        return target

    def exists(self, path: str) -> bool:
        return self.local_path(path).exists()

    def is_dir(self, path: str) -> bool:
        return self.local_path(path).is_dir()

    def modification_time(self, path: str) -> float:
        return self.local_path(path).stat().st_mtime

    def read_bytes(self, path: str) -> bytes:
        return self.local_path(path).read_bytes()

    def write_bytes(self, path: str, data: bytes) -> None:
        target = self.local_path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        temp = target.with_name(f".{target.name}.{uuid.uuid4().hex}.tmp")
        try:
            with open(temp, "wb") as fh:
                fh.write(data)
            os.replace(temp, target)
        finally:
            if temp.exists():
                temp.unlink()

    def move(self, source: str, target: str) -> None:
        destination = self.local_path(target)
        destination.parent.mkdir(parents=True, exist_ok=True)
        os.replace(self.local_path(source), destination)

    def list_dir(self, path: str) -> List[str]:
        directory = self.local_path(path)
        if not directory.is_dir():
            return []
        return sorted(entry.name for entry in directory.iterdir())

    def delete(self, path: str) -> bool:
        target = self.local_path(path)
        if not target.is_file():
            return False
        target.unlink()
        log.debug("Deleted %s", target)
        return True
