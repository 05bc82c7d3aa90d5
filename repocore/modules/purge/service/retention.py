"""Keeps only the newest N builds of each snapshot version."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from repocore.modules.content.domain import WILDCARD, Artifact, Coordinate
from repocore.modules.content.repositories import ManagedRepositoryContent
from repocore.modules.content.util import LayoutException, is_snapshot, sort_versions
from repocore.modules.purge.exceptions import RepositoryPurgeException
from repocore.modules.purge.listeners import ArtifactDeleter, StorageArtifactDeleter

DEFAULT_RETENTION_COUNT = 2


def select_versions_to_purge(versions: Iterable[str], retention_count: int) -> List[str]:
    """Oldest versions beyond the newest ``retention_count``, oldest first."""
    if retention_count < 0:
        raise ValueError(f"retention count must not be negative: {retention_count}")
    ordered = sort_versions(versions)
    if retention_count >= len(ordered):
        return []
    return ordered[: len(ordered) - retention_count]


class RetentionCountPurge:
    def __init__(
        self,
        repository: ManagedRepositoryContent,
        deleter: Optional[ArtifactDeleter] = None,
        retention_count: int = DEFAULT_RETENTION_COUNT,
        include_related: bool = True,
    ) -> None:
        self.repository = repository
        self.deleter = deleter or StorageArtifactDeleter()
        self.retention_count = retention_count
        self.include_related = include_related
        self.log = logging.getLogger(self.__class__.__name__)

    def process(self, path: str) -> List[Artifact]:
        """Purge the snapshot version ``path`` belongs to."""
        try:
            coordinate = self.repository.to_coordinate(path)
        except LayoutException as exc:
            raise RepositoryPurgeException(f"Unable to purge {path}: {exc}") from exc
        if not self.repository.storage.exists(path):
            self.log.debug("Skipping purge of missing file repository=%s path=%s", self.repository.id, path)
            return []
        return self.purge(coordinate)

    def purge(self, coordinate: Coordinate, retention_count: Optional[int] = None) -> List[Artifact]:
        """Delete every artifact of the oldest builds of ``coordinate``'s snapshot version.

        Returns the deleted artifacts. Companion checksum and signature files
        go with them when ``include_related`` is set. Release versions are
        never touched.
        """
        retention = self.retention_count if retention_count is None else retention_count
        if not coordinate.version or not is_snapshot(coordinate.version):
            return []

        selector = Coordinate(
            namespace=coordinate.namespace,
            project_id=coordinate.project_id,
            artifact_id=coordinate.artifact_id,
            version=coordinate.version,
            classifier=WILDCARD,
            include_related=self.include_related,
        )
        try:
            artifacts = self.repository.list_artifacts(selector)
            expired = set(select_versions_to_purge({artifact.artifact_version for artifact in artifacts}, retention))
            if not expired:
                return []
            doomed = sorted(
                {artifact for artifact in artifacts if artifact.artifact_version in expired},
                key=lambda artifact: artifact.path,
            )
            related: List[str] = []
            if selector.include_related:
                for artifact in doomed:
                    related.extend(self.repository.related_paths(artifact))
            removed = self.deleter.delete_artifacts(self.repository, doomed, related)
        except (LayoutException, OSError) as exc:
            raise RepositoryPurgeException(f"Unable to purge {selector}: {exc}") from exc

        self.log.info(
            "Purged repository=%s version=%s:%s builds=%s files=%d retention=%d",
            self.repository.id,
            selector.artifact_id,
            selector.version,
            ",".join(sort_versions(expired)),
            len(removed),
            retention,
        )
        return doomed
