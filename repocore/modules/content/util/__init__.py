"""Version rules and errors for the content module."""

from .exceptions import LayoutException
from .versions import (
    SNAPSHOT,
    compare_versions,
    get_base_version,
    is_generic_snapshot,
    is_snapshot,
    is_unique_snapshot,
    is_version_token,
    max_version,
    sort_versions,
    split_unique_snapshot,
    version_key,
)

__all__ = [
    "LayoutException",
    "SNAPSHOT",
    "compare_versions",
    "get_base_version",
    "is_generic_snapshot",
    "is_snapshot",
    "is_unique_snapshot",
    "is_version_token",
    "max_version",
    "sort_versions",
    "split_unique_snapshot",
    "version_key",
]
