"""Pure merge operators for metadata documents."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, Optional, Tuple

from repocore.modules.content.util import max_version

from .domain import MetadataDocument, Plugin, SnapshotVersion


def _first(main: Optional[str], source: Optional[str]) -> Optional[str]:
    return main if main else source


def merge_snapshot(main: Optional[SnapshotVersion], source: Optional[SnapshotVersion]) -> Optional[SnapshotVersion]:
    """Later ``(timestamp, build_number)`` wins."""
    if main is None:
        return source
    if source is None:
        return main
    return main if main.sort_key >= source.sort_key else source


def merge_last_updated(main: Optional[str], source: Optional[str]) -> Optional[str]:
    candidates = [value for value in (main, source) if value]
    if not candidates:
        return None
    return max(candidates, key=int)


def merge_plugins(main: Iterable[Plugin], source: Iterable[Plugin]) -> Tuple[Plugin, ...]:
    # First entry seen for a prefix is kept.
    merged: Dict[str, Plugin] = {}
    for plugin in list(main) + list(source):
        merged.setdefault(plugin.prefix, plugin)
    return tuple(sorted(merged.values(), key=lambda plugin: plugin.prefix))


def merge_metadata(main: MetadataDocument, source: MetadataDocument) -> MetadataDocument:
    """Merge ``source`` into ``main`` and return a new document.

    Identity fields keep the first non-empty value. Versions are unioned and
    ``latest``/``release`` recomputed from the union, so the result does not
    depend on argument order for anything but identity and plugin names.
    """
    versions = set(main.versions) | set(source.versions)
    merged = MetadataDocument(
        group_id=_first(main.group_id, source.group_id),
        artifact_id=_first(main.artifact_id, source.artifact_id),
        version=_first(main.version, source.version),
        snapshot=merge_snapshot(main.snapshot, source.snapshot),
        last_updated=merge_last_updated(main.last_updated, source.last_updated),
        plugins=merge_plugins(main.plugins, source.plugins),
    )
    if versions:
        return merged.with_versions(versions)
    return replace(
        merged,
        latest=max_version((main.latest, source.latest)),
        release=max_version((main.release, source.release)),
    )
