"""Maven 1 ``group/<type>s/file`` layout."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from repocore.modules.content.domain import Coordinate
from repocore.modules.content.util import LayoutException, is_version_token

from .base import RepositoryLayout
from .mapping import get_extension

EXTENSION_PATTERN = re.compile(r"(\.tar\.gz$)|(\.tar\.bz2$)|(\.[\-a-z0-9]*$)", re.IGNORECASE)

_DISTRIBUTION_TYPES = {
    "tar.gz": "distribution-tgz",
    "zip": "distribution-zip",
}

# Classifiers implied by the type directory; any other classifier cannot be
# told apart from a version qualifier and stays part of the version.
_TYPE_CLASSIFIERS = {
    "java-source": "sources",
    "javadoc": "javadoc",
    "test-jar": "tests",
    "ejb-client": "client",
}


def _directory_for(artifact_type: str) -> str:
    if artifact_type.startswith("distribution-"):
        return "distributions"
    return f"{artifact_type}s"


def split_filename(filename: str) -> Tuple[str, Optional[str]]:
    """Separate ``name-version[-classifier]`` from its extension."""
    match = EXTENSION_PATTERN.search(filename)
    if not match or match.start() == 0:
        return filename, None
    return filename[: match.start()], filename[match.start() + 1:]


def split_artifact_and_version(stem: str) -> Tuple[str, str]:
    tokens: List[str] = stem.split("-")
    index = 0
    while index < len(tokens) and not is_version_token(tokens[index]):
        index += 1
    if index == 0:
        index = 1
    return "-".join(tokens[:index]), "-".join(tokens[index:])


class LegacyLayout(RepositoryLayout):
    layout_id = "legacy"

    def directory_of(self, coordinate: Coordinate) -> str:
        return f"{coordinate.namespace}/{_directory_for(coordinate.type or 'jar')}"

    def to_path(self, coordinate: Coordinate) -> str:
        coordinate = self._require_artifact(coordinate)
        return f"{self.directory_of(coordinate)}/{self._filename(coordinate)}"

    def to_coordinate(self, path: str) -> Coordinate:
        parts = self._split(path)
        if len(parts) != 3:
            raise LayoutException("Invalid number of parts to the path for a legacy layout (expected 3)", path)
        namespace, type_directory, filename = parts
        if not namespace or not filename:
            raise LayoutException("Empty path segment", path)
        if not type_directory.endswith("s") or len(type_directory) < 2:
            raise LayoutException(f"Invalid directory {type_directory}, does not end in 's'", path)

        stem, extension = split_filename(filename)
        if not extension:
            raise LayoutException("Path filename does not have an extension (missing type)", path)

        directory_type = type_directory[:-1]
        if directory_type == "distribution":
            artifact_type = _DISTRIBUTION_TYPES.get(extension)
            if artifact_type is None:
                raise LayoutException(f"Unsupported distribution extension {extension}", path)
        else:
            artifact_type = directory_type
            if get_extension(artifact_type) != extension:
                raise LayoutException(
                    f"Mismatch on extension {extension} for directory {type_directory}", path
                )

        artifact_id, version = split_artifact_and_version(stem)
        if not version:
            raise LayoutException("No version found in filename", path)

        classifier = _TYPE_CLASSIFIERS.get(artifact_type)
        if classifier and version.endswith("-" + classifier):
            version = version[: -len(classifier) - 1]
        else:
            classifier = None
        if not version:
            raise LayoutException("No version found in filename", path)

        try:
            return Coordinate(
                namespace=namespace,
                project_id=artifact_id,
                artifact_id=artifact_id,
                version=version,
                classifier=classifier,
                type=artifact_type,
            )
        except ValueError as exc:
            raise LayoutException(str(exc), path) from exc
