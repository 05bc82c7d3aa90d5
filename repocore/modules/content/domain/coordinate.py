"""Structured artifact coordinates."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from repocore.modules.content.util.versions import (
    get_base_version,
    is_generic_snapshot,
    is_snapshot,
    is_unique_snapshot,
)

WILDCARD = "*"


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class Coordinate:
    """Selects a namespace, project, version or single artifact inside a repository.

    Every field is optional so the same value can address any level of the
    hierarchy. ``version`` always holds the base version (``1.0-SNAPSHOT``);
    ``artifact_version`` holds the resolved build (``1.0-20070821.213044-8``)
    and equals ``version`` for releases and generic snapshots. A classifier of
    ``*`` matches any classifier when the coordinate is used as a selector.
    """

    namespace: Optional[str] = None
    project_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None
    artifact_version: Optional[str] = None
    classifier: Optional[str] = None
    type: Optional[str] = None
    include_related: bool = False

    def __post_init__(self) -> None:
        for name in ("namespace", "project_id", "artifact_id", "version", "artifact_version", "classifier", "type"):
            object.__setattr__(self, name, _blank_to_none(getattr(self, name)))

        if self.project_id is None:
            object.__setattr__(self, "project_id", self.artifact_id)
        if self.artifact_id is None:
            object.__setattr__(self, "artifact_id", self.project_id)

        version = self.version
        artifact_version = self.artifact_version
        if artifact_version is not None and version is None:
            raise ValueError(f"artifact version {artifact_version} given without a version")
        if version is None:
            return

        if is_unique_snapshot(version):
            if artifact_version is None:
                artifact_version = version
            elif artifact_version != version:
                raise ValueError(f"conflicting snapshot builds {version} and {artifact_version}")
            version = get_base_version(version)
        elif artifact_version is None:
            artifact_version = version

        if is_unique_snapshot(artifact_version):
            if not is_generic_snapshot(version):
                raise ValueError(f"snapshot build {artifact_version} under release version {version}")
            if get_base_version(artifact_version) != version:
                raise ValueError(f"snapshot build {artifact_version} does not belong to {version}")
        elif artifact_version != version:
            raise ValueError(f"artifact version {artifact_version} does not match version {version}")

        object.__setattr__(self, "version", version)
        object.__setattr__(self, "artifact_version", artifact_version)

    @property
    def is_snapshot(self) -> bool:
        return is_snapshot(self.version)

    @property
    def has_wildcard_classifier(self) -> bool:
        return self.classifier == WILDCARD

    @property
    def namespace_path(self) -> str:
        return (self.namespace or "").replace(".", "/")

    def project_coordinate(self) -> "Coordinate":
        return Coordinate(namespace=self.namespace, project_id=self.project_id)

    def version_coordinate(self) -> "Coordinate":
        return Coordinate(namespace=self.namespace, project_id=self.project_id, version=self.version)

    def with_artifact_version(self, artifact_version: str) -> "Coordinate":
        return replace(self, version=get_base_version(artifact_version), artifact_version=artifact_version)

    def __str__(self) -> str:
        parts = [self.namespace or "", self.artifact_id or "", self.artifact_version or self.version or ""]
        if self.classifier:
            parts.append(self.classifier)
        if self.type:
            parts.append(self.type)
        return ":".join(parts)
