"""Layout-aware view over the files of one managed repository."""

from __future__ import annotations

import logging
from typing import Iterator, List, Union

from repocore.modules.content.domain import Artifact, Coordinate, Namespace, Project, Version
from repocore.modules.content.layout import (
    LayoutType,
    RepositoryLayout,
    get_layout,
    is_metadata,
    is_support_file,
)
from repocore.modules.content.layout.request import SUPPORT_EXTENSIONS
from repocore.modules.content.util import LayoutException, sort_versions

from .base import RepositoryStorage

log = logging.getLogger(__name__)


class ManagedRepositoryContent:
    """Builds hierarchy nodes and enumerates artifacts of a local repository."""

    def __init__(
        self,
        repository_id: str,
        storage: RepositoryStorage,
        layout: Union[RepositoryLayout, LayoutType, str] = LayoutType.DEFAULT,
    ) -> None:
        self.id = repository_id
        self.storage = storage
        self.layout = layout if isinstance(layout, RepositoryLayout) else get_layout(layout)

    def __repr__(self) -> str:
        return f"ManagedRepositoryContent(id={self.id!r}, layout={self.layout.layout_id!r})"

    def to_path(self, coordinate: Coordinate) -> str:
        return self.layout.to_path(coordinate)

    def to_coordinate(self, path: str) -> Coordinate:
        return self.layout.to_coordinate(path)

    def get_namespace(self, coordinate: Coordinate) -> Namespace:
        if not coordinate.namespace:
            raise ValueError(f"Coordinate {coordinate} has no namespace")
        return Namespace(name=coordinate.namespace, path=coordinate.namespace_path, repository=self)

    def get_project(self, coordinate: Coordinate) -> Project:
        namespace = self.get_namespace(coordinate)
        if not coordinate.project_id:
            raise ValueError(f"Coordinate {coordinate} has no project id")
        return Project(
            namespace=namespace,
            project_id=coordinate.project_id,
            path=f"{namespace.path}/{coordinate.project_id}",
            repository=self,
        )

    def get_version(self, coordinate: Coordinate) -> Version:
        project = self.get_project(coordinate)
        if not coordinate.version:
            raise ValueError(f"Coordinate {coordinate} has no version")
        return Version(
            project=project,
            version=coordinate.version,
            path=f"{project.path}/{coordinate.version}",
            repository=self,
        )

    def get_artifact(self, coordinate: Coordinate) -> Artifact:
        version = self.get_version(coordinate)
        return Artifact(
            version=version,
            artifact_id=coordinate.artifact_id,
            artifact_version=coordinate.artifact_version,
            classifier=coordinate.classifier,
            type=coordinate.type,
            path=self.to_path(coordinate),
            repository=self,
        )

    def _candidate_paths(self, coordinate: Coordinate) -> Iterator[str]:
        if self.layout.layout_id == LayoutType.LEGACY.value:
            namespace = coordinate.namespace
            for type_directory in self.storage.list_dir(namespace):
                directory = f"{namespace}/{type_directory}"
                if self.storage.is_dir(directory):
                    for name in self.storage.list_dir(directory):
                        yield f"{directory}/{name}"
            return

        project = self.get_project(coordinate)
        if coordinate.version:
            version_dirs = [coordinate.version]
        else:
            version_dirs = self.storage.list_dir(project.path)
        for version_dir in version_dirs:
            directory = f"{project.path}/{version_dir}"
            if not self.storage.is_dir(directory):
                continue
            for name in self.storage.list_dir(directory):
                yield f"{directory}/{name}"

    def _iter_artifacts(self, coordinate: Coordinate) -> Iterator[Artifact]:
        for path in self._candidate_paths(coordinate):
            name = path.rsplit("/", 1)[-1]
            if name.startswith(".") or is_support_file(path) or is_metadata(path):
                continue
            if self.storage.is_dir(path):
                continue
            try:
                found = self.to_coordinate(path)
            except LayoutException:
                log.debug("Skipping non-artifact path=%s repository=%s", path, self.id)
                continue
            if found.project_id != coordinate.project_id or found.namespace != coordinate.namespace:
                continue
            yield self.get_artifact(found)

    def list_versions(self, coordinate: Coordinate) -> List[str]:
        """Versions of a project that hold at least one real artifact, sorted ascending."""
        return sort_versions(artifact.version.version for artifact in self._iter_artifacts(coordinate.project_coordinate()))

    def list_artifacts(self, selector: Coordinate) -> List[Artifact]:
        """Artifacts matching ``selector``.

        ``version`` narrows the search to one version directory. A timestamped
        ``artifact_version`` narrows it further to that build; otherwise every
        build of the version matches. ``classifier`` and ``type`` filter only
        when set, and a ``*`` classifier matches anything.
        """
        specific_build = selector.artifact_version if selector.artifact_version != selector.version else None
        matches: List[Artifact] = []
        for artifact in self._iter_artifacts(selector):
            if selector.version and artifact.version.version != selector.version:
                continue
            if selector.artifact_id and artifact.artifact_id != selector.artifact_id:
                continue
            if specific_build and artifact.artifact_version != specific_build:
                continue
            if selector.classifier and not selector.has_wildcard_classifier and artifact.classifier != selector.classifier:
                continue
            if selector.type and artifact.type != selector.type:
                continue
            matches.append(artifact)
        return sorted(matches, key=lambda item: item.path)

    def related_paths(self, artifact: Artifact) -> List[str]:
        """Checksum and signature files stored next to ``artifact``."""
        return [
            artifact.path + extension
            for extension in SUPPORT_EXTENSIONS
            if self.storage.exists(artifact.path + extension)
        ]
