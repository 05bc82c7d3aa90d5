"""Contract for pulling a single file from a remote repository."""

from __future__ import annotations

from pathlib import Path

from repocore.modules.proxy.domain import RemoteRepository


class TransferFailedException(RuntimeError):
    """Raised when a remote file could not be downloaded."""


class ResourceDoesNotExistException(TransferFailedException):
    """Raised when the remote answers that the file does not exist."""


class RemoteTransport:
    def fetch(self, remote: RemoteRepository, path: str, destination: Path) -> None:
        """Download ``path`` from ``remote`` into ``destination``, fully or not at all."""
        raise NotImplementedError
