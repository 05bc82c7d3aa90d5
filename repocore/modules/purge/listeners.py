"""Deletion collaborator used by the purge engine."""

from __future__ import annotations

import logging
from typing import Iterable, List, Protocol, Sequence

from repocore.modules.content.domain import Artifact
from repocore.modules.content.repositories import ManagedRepositoryContent

log = logging.getLogger(__name__)


class PurgeListener(Protocol):
    def deleted(self, repository: ManagedRepositoryContent, artifact: Artifact) -> None:
        ...


class ArtifactDeleter:
    def delete_artifacts(
        self, repository: ManagedRepositoryContent, artifacts: Sequence[Artifact], related_paths: Sequence[str]
    ) -> List[str]:
        """Delete ``artifacts`` and ``related_paths``; return the paths actually removed."""
        raise NotImplementedError


class StorageArtifactDeleter(ArtifactDeleter):
    """Deletes through repository storage and tells listeners about each artifact."""

    def __init__(self, listeners: Iterable[PurgeListener] = ()) -> None:
        self.listeners: List[PurgeListener] = list(listeners)

    def delete_artifacts(
        self, repository: ManagedRepositoryContent, artifacts: Sequence[Artifact], related_paths: Sequence[str]
    ) -> List[str]:
        removed: List[str] = []
        for artifact in artifacts:
            for listener in self.listeners:
                try:
                    listener.deleted(repository, artifact)
                except Exception:  # noqa: BLE001
                    log.exception("Purge listener failed repository=%s artifact=%s", repository.id, artifact.path)
            if repository.storage.delete(artifact.path):
                removed.append(artifact.path)
        for path in related_paths:
            if repository.storage.delete(path):
                removed.append(path)
        return removed
