"""Helpers for classifying and translating incoming request paths."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from repocore.modules.content.util import LayoutException

from .base import METADATA_FILENAME, RepositoryLayout
from .registry import LayoutType, get_layout

log = logging.getLogger(__name__)

SUPPORT_EXTENSIONS = (".sha1", ".md5", ".sha256", ".sha512", ".asc", ".pgp")
ARCHETYPE_CATALOG_FILENAME = "archetype-catalog.xml"
UNKNOWN_LAYOUT = "unknown"


def _strip(path: str) -> str:
    return path.strip().replace("\\", "/").lstrip("/")


def is_metadata(path: Optional[str]) -> bool:
    if not path:
        return False
    path = _strip(path)
    return path == METADATA_FILENAME or path.endswith("/" + METADATA_FILENAME)


def is_archetype_catalog(path: Optional[str]) -> bool:
    return bool(path) and _strip(path).endswith(ARCHETYPE_CATALOG_FILENAME)


def split_support_suffix(path: str) -> Tuple[str, str]:
    """Return ``(path_without_suffix, suffix)``; the suffix is empty for non-support files."""
    for extension in SUPPORT_EXTENSIONS:
        if path.endswith(extension):
            return path[: -len(extension)], extension
    return path, ""


def is_support_file(path: Optional[str]) -> bool:
    if not path:
        return False
    return bool(split_support_suffix(path)[1])


def is_metadata_support_file(path: Optional[str]) -> bool:
    if not is_support_file(path):
        return False
    return is_metadata(split_support_suffix(path)[0])


def detect_layout(path: str) -> str:
    """Guess which layout a request path was made in from its depth."""
    parts = _strip(path).split("/")
    if len(parts) > 3:
        return LayoutType.DEFAULT.value
    if len(parts) == 3:
        if is_metadata(path) or is_metadata_support_file(path):
            return LayoutType.DEFAULT.value
        return LayoutType.LEGACY.value
    return UNKNOWN_LAYOUT


def to_native_path(path: Optional[str], layout: RepositoryLayout) -> str:
    """Rewrite a request made in either layout into ``layout``'s path for the same file."""
    if path is None or not path.strip():
        raise LayoutException("Request path is blank.")
    path = _strip(path)
    if is_metadata(path) or is_metadata_support_file(path):
        return path

    reference, suffix = split_support_suffix(path)
    request_layout = detect_layout(reference)
    if request_layout == UNKNOWN_LAYOUT:
        raise LayoutException("Unable to detect the layout of request path", path)
    coordinate = get_layout(request_layout).to_coordinate(reference)
    native = layout.to_path(coordinate) + suffix
    if native != path:
        log.debug("Translated %s request path=%s -> %s", request_layout, path, native)
    return native
