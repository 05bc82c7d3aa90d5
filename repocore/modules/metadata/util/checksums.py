"""Checksum companion files (``.sha1``, ``.md5``) for repository files."""

from __future__ import annotations

import hashlib
import logging
from typing import Dict, Iterable, Sequence

from repocore.modules.content.repositories import RepositoryStorage

log = logging.getLogger(__name__)

DEFAULT_ALGORITHMS = ("sha1", "md5")


def compute_checksums(data: bytes, algorithms: Iterable[str] = DEFAULT_ALGORITHMS) -> Dict[str, str]:
    return {algorithm: hashlib.new(algorithm, data).hexdigest() for algorithm in algorithms}


def parse_checksum(content: bytes) -> str:
    """First token of a checksum file; some tools append the file name."""
    text = content.decode("utf-8", errors="replace").strip()
    return text.split()[0].lower() if text else ""


def fix_checksums(storage: RepositoryStorage, path: str, algorithms: Sequence[str] = DEFAULT_ALGORITHMS) -> None:
    """(Re)write ``<path>.<algorithm>`` for every algorithm."""
    data = storage.read_bytes(path)
    for algorithm, digest in compute_checksums(data, algorithms).items():
        storage.write_bytes(f"{path}.{algorithm}", digest.encode("ascii"))
    log.debug("Checksums refreshed path=%s algorithms=%s", path, ",".join(algorithms))


def is_valid_checksum(data: bytes, algorithm: str, checksum_file: bytes) -> bool:
    expected = parse_checksum(checksum_file)
    return bool(expected) and hashlib.new(algorithm, data).hexdigest() == expected
