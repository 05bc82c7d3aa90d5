"""In-memory form of a ``maven-metadata.xml`` document."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Tuple

from repocore.modules.content.util import is_snapshot, max_version, sort_versions


@dataclass(frozen=True)
class SnapshotVersion:
    """Latest timestamped build of a snapshot line."""

    timestamp: str
    build_number: int

    @property
    def sort_key(self) -> Tuple[str, int]:
        return self.timestamp, self.build_number

    @property
    def last_updated(self) -> str:
        return self.timestamp.replace(".", "")

    def resolve(self, base_version: str) -> str:
        """``1.0-SNAPSHOT`` -> ``1.0-<timestamp>-<build>``."""
        prefix = base_version[: -len("SNAPSHOT")] if base_version.endswith("SNAPSHOT") else base_version + "-"
        return f"{prefix}{self.timestamp}-{self.build_number}"


@dataclass(frozen=True)
class Plugin:
    prefix: str
    artifact_id: str
    name: Optional[str] = None


@dataclass(frozen=True)
class MetadataDocument:
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None
    latest: Optional[str] = None
    release: Optional[str] = None
    versions: Tuple[str, ...] = field(default_factory=tuple)
    snapshot: Optional[SnapshotVersion] = None
    last_updated: Optional[str] = None
    plugins: Tuple[Plugin, ...] = field(default_factory=tuple)

    @property
    def has_versioning(self) -> bool:
        return bool(self.latest or self.release or self.versions or self.snapshot or self.last_updated)

    def with_versions(self, versions: Iterable[str]) -> "MetadataDocument":
        """Copy with ``versions`` sorted and ``latest``/``release`` derived from them."""
        ordered = tuple(sort_versions(versions))
        return replace(
            self,
            versions=ordered,
            latest=max_version(ordered),
            release=max_version(version for version in ordered if not is_snapshot(version)),
        )
