"""Path <-> coordinate mapping for the default and legacy layouts."""

from .base import METADATA_FILENAME, RepositoryLayout
from .default import DefaultLayout
from .legacy import LegacyLayout
from .mapping import get_extension, map_extension_and_classifier_to_type
from .registry import LayoutType, get_layout
from .request import (
    detect_layout,
    is_archetype_catalog,
    is_metadata,
    is_metadata_support_file,
    is_support_file,
    split_support_suffix,
    to_native_path,
)

__all__ = [
    "METADATA_FILENAME",
    "RepositoryLayout",
    "DefaultLayout",
    "LegacyLayout",
    "LayoutType",
    "get_layout",
    "get_extension",
    "map_extension_and_classifier_to_type",
    "detect_layout",
    "is_archetype_catalog",
    "is_metadata",
    "is_metadata_support_file",
    "is_support_file",
    "split_support_suffix",
    "to_native_path",
]
