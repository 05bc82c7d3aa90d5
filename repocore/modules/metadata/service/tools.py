"""Synthesizes canonical ``maven-metadata.xml`` files from repository content."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Set, Tuple

from repocore.locks import PathLockRegistry
from repocore.modules.content.domain import Coordinate
from repocore.modules.content.layout import METADATA_FILENAME, is_metadata
from repocore.modules.content.repositories import ManagedRepositoryContent
from repocore.modules.content.util import (
    is_generic_snapshot,
    is_snapshot,
    split_unique_snapshot,
)
from repocore.modules.metadata.codec import read_metadata, write_metadata
from repocore.modules.metadata.domain import MetadataDocument, Plugin, SnapshotVersion
from repocore.modules.metadata.merge import merge_last_updated, merge_plugins
from repocore.modules.metadata.util import (
    DEFAULT_ALGORITHMS,
    ContentNotFoundException,
    RepositoryMetadataException,
    fix_checksums,
)
from repocore.modules.proxy.config import ConnectorConfiguration


def get_repository_specific_name(remote_repo_id: str, metadata_path: str) -> str:
    """``a/b/maven-metadata.xml`` -> ``a/b/maven-metadata-<remote_repo_id>.xml``."""
    directory, _, _ = metadata_path.rpartition("/")
    name = f"maven-metadata-{remote_repo_id}.xml"
    return f"{directory}/{name}" if directory else name


def _looks_like_version_directory(name: str) -> bool:
    """Snapshot names and names starting with a digit are versions.

    Letter-led names such as ``m2``, ``rc`` or ``build210`` are treated as
    project directories.
    """
    return is_snapshot(name) or name[:1].isdigit()


class MetadataTools:
    """Reads, writes and regenerates project and version metadata.

    Every update is serialized per canonical path through the shared
    :class:`PathLockRegistry` and only overwrites a file that is absent or older
    than the caller's scan start, so a document written by a concurrent proxy
    fetch is never clobbered by an older scan.
    """

    MAVEN_METADATA = METADATA_FILENAME

    def __init__(
        self,
        configuration: ConnectorConfiguration,
        locks: Optional[PathLockRegistry] = None,
        checksum_algorithms: Sequence[str] = DEFAULT_ALGORITHMS,
    ) -> None:
        self.configuration = configuration
        self.locks = locks or PathLockRegistry()
        self.checksum_algorithms = tuple(checksum_algorithms)
        self.log = logging.getLogger(self.__class__.__name__)

    # Paths

    def to_path(self, coordinate: Coordinate) -> str:
        if not coordinate.namespace:
            raise ValueError(f"Coordinate {coordinate} has no namespace")
        parts = [coordinate.namespace_path]
        if coordinate.project_id:
            parts.append(coordinate.project_id)
            if coordinate.version:
                parts.append(coordinate.version)
        parts.append(self.MAVEN_METADATA)
        return "/".join(parts)

    @staticmethod
    def _metadata_directories(path: str) -> List[str]:
        if not is_metadata(path):
            raise RepositoryMetadataException(f"Not a metadata path: {path}")
        return [part for part in path.strip().lstrip("/").split("/")[:-1] if part]

    def to_project_coordinate(self, path: str) -> Coordinate:
        parts = self._metadata_directories(path)
        if len(parts) < 2:
            raise RepositoryMetadataException(f"Unable to determine project from metadata path: {path}")
        return Coordinate(namespace=".".join(parts[:-1]), project_id=parts[-1])

    def to_version_coordinate(self, path: str) -> Coordinate:
        parts = self._metadata_directories(path)
        if len(parts) < 3:
            raise RepositoryMetadataException(f"Unable to determine version from metadata path: {path}")
        try:
            return Coordinate(namespace=".".join(parts[:-2]), project_id=parts[-2], version=parts[-1])
        except ValueError as exc:
            raise RepositoryMetadataException(f"Invalid version in metadata path {path}: {exc}") from exc

    def version_of(self, path: str) -> Optional[str]:
        """Version directory of a version-level metadata path, ``None`` for project or group level."""
        parts = self._metadata_directories(path)
        if len(parts) >= 3 and _looks_like_version_directory(parts[-1]):
            return parts[-1]
        return None

    get_repository_specific_name = staticmethod(get_repository_specific_name)

    # Reading and writing

    def read_metadata(self, repository: ManagedRepositoryContent, path: str) -> Optional[MetadataDocument]:
        """Parsed document at ``path``; ``None`` when the file does not exist."""
        if not repository.storage.exists(path):
            return None
        return read_metadata(repository.storage.read_bytes(path), source=f"{repository.id}:{path}")

    def read_metadata_or_none(self, repository: ManagedRepositoryContent, path: str) -> Optional[MetadataDocument]:
        try:
            return self.read_metadata(repository, path)
        except RepositoryMetadataException as exc:
            self.log.warning("Ignoring unreadable metadata repository=%s path=%s: %s", repository.id, path, exc)
            return None

    def write_metadata(self, repository: ManagedRepositoryContent, path: str, document: MetadataDocument) -> None:
        repository.storage.write_bytes(path, write_metadata(document))
        fix_checksums(repository.storage, path, self.checksum_algorithms)
        self.log.debug("Wrote metadata repository=%s path=%s", repository.id, path)

    def read_proxy_metadata(
        self, repository: ManagedRepositoryContent, path: str
    ) -> List[Tuple[str, MetadataDocument]]:
        """Side-car documents of every configured remote for the canonical ``path``."""
        documents = []
        for remote_repo_id in self.configuration.proxied_repository_ids(repository.id):
            document = self.read_metadata_or_none(repository, get_repository_specific_name(remote_repo_id, path))
            if document is not None:
                documents.append((remote_repo_id, document))
        return documents

    @contextmanager
    def hold(self, repository: ManagedRepositoryContent, path: str) -> Iterator[None]:
        with self.locks.hold(PathLockRegistry.key_for(repository.id, path)):
            yield

    def is_current(self, repository: ManagedRepositoryContent, path: str, scan_start: float) -> bool:
        """True when ``path`` exists and was written at or after ``scan_start``."""
        storage = repository.storage
        return storage.exists(path) and storage.modification_time(path) >= scan_start

    # Synthesis

    def gather_snapshot_versions(self, repository: ManagedRepositoryContent, coordinate: Coordinate) -> Set[str]:
        """Resolved builds of a snapshot version, local files and proxied side-cars alike."""
        version = repository.get_version(coordinate)
        builds = {
            artifact.artifact_version
            for artifact in repository.list_artifacts(version.coordinate)
            if is_snapshot(artifact.artifact_version)
        }
        for remote_repo_id, document in self.read_proxy_metadata(repository, self.to_path(version.coordinate)):
            if document.snapshot is not None:
                builds.add(document.snapshot.resolve(version.version))
        return builds

    def update_project_metadata(
        self,
        repository: ManagedRepositoryContent,
        coordinate: Coordinate,
        scan_start: Optional[float] = None,
    ) -> Optional[MetadataDocument]:
        """Regenerate ``group/artifact/maven-metadata.xml``.

        Returns the written document, or ``None`` when the file is newer than
        ``scan_start`` or there is nothing to describe.
        """
        project = repository.get_project(coordinate)
        path = self.to_path(project.coordinate)
        scan_start = time.time() if scan_start is None else scan_start

        with self.hold(repository, path):
            if self.is_current(repository, path, scan_start):
                self.log.debug("Skipping project metadata newer than scan repository=%s path=%s", repository.id, path)
                return None

            existing = self.read_metadata_or_none(repository, path)
            versions: Set[str] = set(repository.list_versions(project.coordinate))
            plugins: Tuple[Plugin, ...] = existing.plugins if existing else ()
            last_updated = existing.last_updated if existing else None
            for remote_repo_id, proxied in self.read_proxy_metadata(repository, path):
                versions.update(proxied.versions)
                plugins = merge_plugins(plugins, proxied.plugins)
                last_updated = merge_last_updated(last_updated, proxied.last_updated)

            if versions:
                document = MetadataDocument(
                    group_id=project.namespace.name,
                    artifact_id=project.project_id,
                    plugins=plugins,
                    last_updated=last_updated,
                ).with_versions(versions)
            elif plugins:
                # No versions below: the "project" directory is a group holding plugins.
                document = MetadataDocument(
                    group_id=f"{project.namespace.name}.{project.project_id}",
                    plugins=plugins,
                    last_updated=last_updated,
                )
            else:
                self.log.info("No versions found for project repository=%s path=%s", repository.id, path)
                return None

            self.write_metadata(repository, path, document)
            self.log.info(
                "Updated project metadata repository=%s path=%s versions=%d latest=%s release=%s",
                repository.id,
                path,
                len(document.versions),
                document.latest,
                document.release,
            )
            return document

    def update_version_metadata(
        self,
        repository: ManagedRepositoryContent,
        coordinate: Coordinate,
        scan_start: Optional[float] = None,
    ) -> Optional[MetadataDocument]:
        """Regenerate ``group/artifact/version/maven-metadata.xml``."""
        version = repository.get_version(coordinate)
        path = self.to_path(version.coordinate)
        scan_start = time.time() if scan_start is None else scan_start

        with self.hold(repository, path):
            if self.is_current(repository, path, scan_start):
                self.log.debug("Skipping version metadata newer than scan repository=%s path=%s", repository.id, path)
                return None

            namespace = version.project.namespace.name
            artifact_id = version.project.project_id
            if is_snapshot(version.version):
                document = self._snapshot_document(repository, version.coordinate, namespace, artifact_id)
            else:
                if not repository.list_artifacts(version.coordinate):
                    raise ContentNotFoundException(f"No artifacts found for version {version.coordinate}")
                document = MetadataDocument(group_id=namespace, artifact_id=artifact_id, version=version.version)

            self.write_metadata(repository, path, document)
            self.log.info(
                "Updated version metadata repository=%s path=%s snapshot=%s",
                repository.id,
                path,
                document.snapshot.resolve(version.version) if document.snapshot else "-",
            )
            return document

    def _snapshot_document(
        self,
        repository: ManagedRepositoryContent,
        coordinate: Coordinate,
        namespace: str,
        artifact_id: str,
    ) -> MetadataDocument:
        builds = self.gather_snapshot_versions(repository, coordinate)
        if not builds:
            raise ContentNotFoundException(f"No snapshot versions found on reference {coordinate}")

        timestamped = [split for split in (split_unique_snapshot(build) for build in builds) if split]
        if timestamped:
            _, timestamp, build_number = max(timestamped, key=lambda split: (split[1], split[2]))
            snapshot = SnapshotVersion(timestamp=timestamp, build_number=build_number)
            return MetadataDocument(
                group_id=namespace,
                artifact_id=artifact_id,
                version=coordinate.version,
                snapshot=snapshot,
                last_updated=snapshot.last_updated,
            )
        if any(is_generic_snapshot(build) for build in builds):
            return MetadataDocument(group_id=namespace, artifact_id=artifact_id, version=coordinate.version)
        raise RepositoryMetadataException(f"Unable to process snapshot versions {sorted(builds)} of {coordinate}")

    def update_metadata(
        self,
        repository: ManagedRepositoryContent,
        metadata_path: str,
        scan_start: Optional[float] = None,
    ) -> Optional[MetadataDocument]:
        """Regenerate whichever document lives at ``metadata_path``."""
        if self.version_of(metadata_path):
            return self.update_version_metadata(repository, self.to_version_coordinate(metadata_path), scan_start)
        return self.update_project_metadata(repository, self.to_project_coordinate(metadata_path), scan_start)
