"""Errors raised while reading, merging or synthesizing metadata."""

from __future__ import annotations


class RepositoryMetadataException(RuntimeError):
    """Raised when a metadata document cannot be parsed, written or trusted."""


class ContentNotFoundException(RepositoryMetadataException):
    """Raised when there is no content to build a metadata document from."""
