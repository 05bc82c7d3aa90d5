from .checksums import DEFAULT_ALGORITHMS, compute_checksums, fix_checksums, is_valid_checksum, parse_checksum
from .exceptions import ContentNotFoundException, RepositoryMetadataException

__all__ = [
    "DEFAULT_ALGORITHMS",
    "compute_checksums",
    "fix_checksums",
    "is_valid_checksum",
    "parse_checksum",
    "ContentNotFoundException",
    "RepositoryMetadataException",
]
