"""Storage contract used by the repository content services."""

from __future__ import annotations

from pathlib import Path
from typing import List


class RepositoryStorage:
    """Byte-level access to the files of one repository, addressed by relative path."""

    def exists(self, path: str) -> bool:
        raise NotImplementedError

    def is_dir(self, path: str) -> bool:
        raise NotImplementedError

    def modification_time(self, path: str) -> float:
        raise NotImplementedError

    def read_bytes(self, path: str) -> bytes:
        raise NotImplementedError

    def write_bytes(self, path: str, data: bytes) -> None:
        raise NotImplementedError

    def move(self, source: str, target: str) -> None:
        raise NotImplementedError

    def list_dir(self, path: str) -> List[str]:
        raise NotImplementedError

    def delete(self, path: str) -> bool:
        raise NotImplementedError

    def local_path(self, path: str) -> Path:
        raise NotImplementedError
