"""Read and write ``maven-metadata.xml`` documents."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import List, Optional

from repocore.modules.content.util import sort_versions

from .domain import MetadataDocument, Plugin, SnapshotVersion
from .util import RepositoryMetadataException

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

SNAPSHOT_TIMESTAMP_PATTERN = re.compile(r"^[0-9]{8}\.[0-9]{6}$")
LAST_UPDATED_PATTERN = re.compile(r"^[0-9]{14}$")


def _child(node: ET.Element, name: str) -> Optional[ET.Element]:
    return node.find("{*}" + name)


def _text(node: Optional[ET.Element], name: str) -> Optional[str]:
    if node is None:
        return None
    child = _child(node, name)
    if child is None or child.text is None:
        return None
    value = child.text.strip()
    return value or None


def _read_snapshot(versioning: ET.Element, source: str) -> Optional[SnapshotVersion]:
    snapshot = _child(versioning, "snapshot")
    if snapshot is None:
        return None
    timestamp = _text(snapshot, "timestamp")
    build_number = _text(snapshot, "buildNumber")
    if timestamp is None and build_number is None:
        return None
    if timestamp is None or not SNAPSHOT_TIMESTAMP_PATTERN.match(timestamp):
        raise RepositoryMetadataException(f"Invalid snapshot timestamp {timestamp!r} in {source}")
    try:
        number = int(build_number) if build_number is not None else 0
    except ValueError as exc:
        raise RepositoryMetadataException(f"Invalid snapshot buildNumber {build_number!r} in {source}") from exc
    return SnapshotVersion(timestamp=timestamp, build_number=number)


def _read_plugins(root: ET.Element) -> List[Plugin]:
    plugins: List[Plugin] = []
    container = _child(root, "plugins")
    if container is None:
        return plugins
    seen = set()
    for node in container.findall("{*}plugin"):
        prefix = _text(node, "prefix")
        artifact_id = _text(node, "artifactId")
        if not prefix or not artifact_id or prefix in seen:
            continue
        seen.add(prefix)
        plugins.append(Plugin(prefix=prefix, artifact_id=artifact_id, name=_text(node, "name")))
    return sorted(plugins, key=lambda plugin: plugin.prefix)


def read_metadata(data: bytes, source: str = "<bytes>") -> MetadataDocument:
    """Parse a metadata document; ``source`` is only used in error messages.

    Plugins come back sorted by prefix. When versions are listed, ``latest``
    and ``release`` are derived from them and stored values are ignored.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise RepositoryMetadataException(f"Unable to parse metadata xml {source}: {exc}") from exc
    if root.tag.split("}")[-1] != "metadata":
        raise RepositoryMetadataException(f"Unexpected root element <{root.tag}> in {source}")

    versioning = _child(root, "versioning")
    versions: List[str] = []
    snapshot = None
    last_updated = None
    if versioning is not None:
        container = _child(versioning, "versions")
        if container is not None:
            versions = [node.text.strip() for node in container.findall("{*}version") if node.text and node.text.strip()]
        snapshot = _read_snapshot(versioning, source)
        last_updated = _text(versioning, "lastUpdated")
        if last_updated is not None and not LAST_UPDATED_PATTERN.match(last_updated):
            raise RepositoryMetadataException(f"Invalid lastUpdated {last_updated!r} in {source}")

    document = MetadataDocument(
        group_id=_text(root, "groupId"),
        artifact_id=_text(root, "artifactId"),
        version=_text(root, "version"),
        latest=_text(versioning, "latest"),
        release=_text(versioning, "release"),
        versions=tuple(sort_versions(versions)),
        snapshot=snapshot,
        last_updated=last_updated,
        plugins=tuple(_read_plugins(root)),
    )
    if document.versions:
        return document.with_versions(document.versions)
    return document


def _add(parent: ET.Element, name: str, value: Optional[str]) -> None:
    if value:
        ET.SubElement(parent, name).text = value


def write_metadata(document: MetadataDocument) -> bytes:
    """Serialize ``document``; absent values are omitted, never written empty."""
    root = ET.Element("metadata")
    _add(root, "groupId", document.group_id)
    _add(root, "artifactId", document.artifact_id)
    _add(root, "version", document.version)

    if document.has_versioning:
        versioning = ET.SubElement(root, "versioning")
        _add(versioning, "latest", document.latest)
        _add(versioning, "release", document.release)
        if document.versions:
            container = ET.SubElement(versioning, "versions")
            for version in document.versions:
                _add(container, "version", version)
        if document.snapshot is not None:
            snapshot = ET.SubElement(versioning, "snapshot")
            _add(snapshot, "timestamp", document.snapshot.timestamp)
            _add(snapshot, "buildNumber", str(document.snapshot.build_number))
        _add(versioning, "lastUpdated", document.last_updated)

    if document.plugins:
        container = ET.SubElement(root, "plugins")
        for plugin in document.plugins:
            node = ET.SubElement(container, "plugin")
            _add(node, "prefix", plugin.prefix)
            _add(node, "artifactId", plugin.artifact_id)
            _add(node, "name", plugin.name)

    ET.indent(root, space="  ")
    return (XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n").encode("utf-8")
