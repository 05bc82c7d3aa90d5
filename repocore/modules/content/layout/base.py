"""Common contract of the repository layouts."""

from __future__ import annotations

from typing import Optional

from repocore.modules.content.domain import Coordinate
from repocore.modules.content.util import LayoutException

from .mapping import get_extension

METADATA_FILENAME = "maven-metadata.xml"


class RepositoryLayout:
    """Maps coordinates to repository paths and back.

    Layouts are stateless; one shared instance per layout type is enough.
    """

    layout_id: str = ""

    def to_path(self, coordinate: Coordinate) -> str:
        raise NotImplementedError

    def to_coordinate(self, path: str) -> Coordinate:
        raise NotImplementedError

    def directory_of(self, coordinate: Coordinate) -> str:
        """Directory holding the artifact files of ``coordinate``."""
        raise NotImplementedError

    @staticmethod
    def _require_artifact(coordinate: Optional[Coordinate]) -> Coordinate:
        if coordinate is None:
            raise ValueError("Artifact reference cannot be null")
        missing = [
            name
            for name in ("namespace", "artifact_id", "version", "type")
            if not getattr(coordinate, name)
        ]
        if missing:
            raise ValueError(f"Artifact reference {coordinate} is missing {', '.join(missing)}")
        if coordinate.has_wildcard_classifier:
            raise ValueError(f"Cannot build a path for wildcard classifier: {coordinate}")
        return coordinate

    @staticmethod
    def _filename(coordinate: Coordinate) -> str:
        name = f"{coordinate.artifact_id}-{coordinate.artifact_version}"
        if coordinate.classifier:
            name = f"{name}-{coordinate.classifier}"
        return f"{name}.{get_extension(coordinate.type)}"

    @staticmethod
    def _split(path: Optional[str]) -> list[str]:
        if path is None or not path.strip():
            raise LayoutException("Unable to convert blank path.")
        normalized = path.strip().replace("\\", "/").lstrip("/")
        if normalized.endswith("/" + METADATA_FILENAME) or normalized == METADATA_FILENAME:
            raise LayoutException("Metadata is not an artifact", path)
        return normalized.split("/")
