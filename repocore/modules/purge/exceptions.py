"""Errors raised while purging repository content."""

from __future__ import annotations


class RepositoryPurgeException(RuntimeError):
    """Raised when an item cannot be purged; only that item is affected."""
