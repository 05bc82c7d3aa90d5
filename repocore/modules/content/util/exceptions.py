"""Errors raised while mapping repository paths."""

from __future__ import annotations


class LayoutException(ValueError):
    """Raised when a path cannot be mapped to (or from) a coordinate."""

    def __init__(self, message: str, path: str | None = None) -> None:
        if path is not None:
            message = f"{message}: {path}"
        super().__init__(message)
        self.path = path
