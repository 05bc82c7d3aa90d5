"""Namespace, project, version and artifact nodes of a managed repository."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .coordinate import Coordinate

if TYPE_CHECKING:
    from repocore.modules.content.repositories.managed import ManagedRepositoryContent


@dataclass(frozen=True)
class Namespace:
    name: str
    path: str
    repository: Optional["ManagedRepositoryContent"] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Project:
    namespace: Namespace
    project_id: str
    path: str
    repository: Optional["ManagedRepositoryContent"] = field(default=None, compare=False, repr=False)

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(namespace=self.namespace.name, project_id=self.project_id)


@dataclass(frozen=True)
class Version:
    project: Project
    version: str
    path: str
    repository: Optional["ManagedRepositoryContent"] = field(default=None, compare=False, repr=False)

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(
            namespace=self.project.namespace.name,
            project_id=self.project.project_id,
            version=self.version,
        )


@dataclass(frozen=True)
class Artifact:
    """A single file in the repository, addressed by its full coordinate."""

    version: Version
    artifact_id: str
    artifact_version: str
    path: str
    classifier: Optional[str] = None
    type: Optional[str] = None
    repository: Optional["ManagedRepositoryContent"] = field(default=None, compare=False, repr=False)

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(
            namespace=self.version.project.namespace.name,
            project_id=self.version.project.project_id,
            artifact_id=self.artifact_id,
            version=self.version.version,
            artifact_version=self.artifact_version,
            classifier=self.classifier,
            type=self.type,
        )
