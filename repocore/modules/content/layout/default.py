"""Maven 2 ``group/artifact/version/file`` layout."""

from __future__ import annotations

import re

from repocore.modules.content.domain import Coordinate
from repocore.modules.content.util import LayoutException, SNAPSHOT, is_unique_snapshot

from .base import RepositoryLayout
from .mapping import map_extension_and_classifier_to_type

TIMESTAMP_BUILD_PATTERN = re.compile(r"^([0-9]{8}\.[0-9]{6})-([0-9]+)")


class DefaultLayout(RepositoryLayout):
    layout_id = "default"

    def directory_of(self, coordinate: Coordinate) -> str:
        return f"{coordinate.namespace_path}/{coordinate.project_id}/{coordinate.version}"

    def to_path(self, coordinate: Coordinate) -> str:
        coordinate = self._require_artifact(coordinate)
        return f"{self.directory_of(coordinate)}/{self._filename(coordinate)}"

    def to_coordinate(self, path: str) -> Coordinate:
        parts = self._split(path)
        if len(parts) < 4:
            raise LayoutException("Not enough parts (4) in path", path)
        if any(not part for part in parts):
            raise LayoutException("Empty path segment", path)

        filename = parts[-1]
        base_version = parts[-2]
        artifact_id = parts[-3]
        namespace = ".".join(parts[:-3])

        prefix = artifact_id + "-"
        if not filename.startswith(prefix):
            raise LayoutException(f"Path filename does not correspond to artifact id {artifact_id}", path)
        rest = filename[len(prefix):]

        if rest.startswith(base_version) and not is_unique_snapshot(base_version):
            trailing = rest[len(base_version):]
            if trailing.startswith("-") and TIMESTAMP_BUILD_PATTERN.match(trailing[1:]):
                raise LayoutException(f"Timestamped snapshot build in release directory {base_version}", path)
            version = base_version
        elif base_version.endswith(SNAPSHOT):
            main_length = len(base_version) - len(SNAPSHOT)
            if main_length == 0:
                raise LayoutException("Timestamped snapshot without a base version", path)
            if rest[:main_length] != base_version[:main_length]:
                raise LayoutException(f"Path version does not correspond to directory version {base_version}", path)
            match = TIMESTAMP_BUILD_PATTERN.match(rest[main_length:])
            if not match:
                raise LayoutException(f"Path filename version does not match directory version {base_version}", path)
            version = f"{rest[:main_length]}{match.group(1)}-{match.group(2)}"
        else:
            raise LayoutException(f"Path filename does not correspond to version {base_version}", path)

        remainder = rest[len(version):]
        if not remainder:
            raise LayoutException("Path filename does not have an extension (missing type)", path)

        classifier = None
        separator = remainder[0]
        if separator == "-":
            dot = remainder.find(".")
            if dot < 0:
                raise LayoutException("Path filename does not have an extension (missing type)", path)
            classifier = remainder[1:dot]
            extension = remainder[dot + 1:]
            if not classifier:
                raise LayoutException("Empty classifier", path)
        elif separator == ".":
            extension = remainder[1:]
        else:
            raise LayoutException(f"Path version does not correspond to directory version {base_version}", path)
        if not extension:
            raise LayoutException("Path filename does not have an extension (missing type)", path)

        artifact_type = map_extension_and_classifier_to_type(classifier, extension, artifact_id)
        try:
            return Coordinate(
                namespace=namespace,
                project_id=artifact_id,
                artifact_id=artifact_id,
                version=base_version,
                artifact_version=version,
                classifier=classifier,
                type=artifact_type,
            )
        except ValueError as exc:
            raise LayoutException(str(exc), path) from exc
