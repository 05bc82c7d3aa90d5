"""Scan consumer that keeps metadata in step with the artifacts on disk."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List, Optional

from repocore.modules.content.layout import is_metadata, is_support_file
from repocore.modules.content.repositories import ManagedRepositoryContent
from repocore.modules.content.util import LayoutException
from repocore.modules.metadata.util import ContentNotFoundException, RepositoryMetadataException

from .tools import MetadataTools


@dataclass(frozen=True)
class ConsumerError:
    kind: str
    path: str
    message: str


class MetadataUpdater:
    """Called by a repository walker once per file.

    ``begin_scan`` fixes the scan start; both metadata levels of each artifact
    are then regenerated unless they were already written during this scan.
    """

    def __init__(self, repository: ManagedRepositoryContent, tools: MetadataTools) -> None:
        self.repository = repository
        self.tools = tools
        self.scan_start: Optional[float] = None
        self.errors: List[ConsumerError] = []
        self.processed = 0
        self.log = logging.getLogger(self.__class__.__name__)

    def begin_scan(self, scan_start: Optional[float] = None) -> None:
        self.scan_start = time.time() if scan_start is None else scan_start
        self.errors = []
        self.processed = 0
        self.log.info("Metadata scan started repository=%s", self.repository.id)

    def _trigger_error(self, kind: str, path: str, exc: Exception) -> None:
        self.errors.append(ConsumerError(kind=kind, path=path, message=str(exc)))
        self.log.warning("Metadata update failed kind=%s repository=%s path=%s: %s", kind, self.repository.id, path, exc)

    def process_file(self, path: str) -> None:
        if self.scan_start is None:
            self.begin_scan()
        path = path.replace("\\", "/").lstrip("/")
        if any(part.startswith(".") for part in path.split("/")):
            return
        if is_metadata(path) or is_support_file(path):
            return

        try:
            coordinate = self.repository.to_coordinate(path)
        except LayoutException as exc:
            self.log.info("Not processing path that is not an artifact: %s (%s)", path, exc)
            return

        self.processed += 1
        try:
            self.tools.update_version_metadata(self.repository, coordinate, self.scan_start)
        except ContentNotFoundException as exc:
            self._trigger_error("content-not-found", path, exc)
        except RepositoryMetadataException as exc:
            self._trigger_error("metadata-error", path, exc)
        except OSError as exc:
            self._trigger_error("storage-error", path, exc)

        try:
            self.tools.update_project_metadata(self.repository, coordinate, self.scan_start)
        except RepositoryMetadataException as exc:
            self._trigger_error("metadata-error", path, exc)
        except OSError as exc:
            self._trigger_error("storage-error", path, exc)

    def complete_scan(self) -> None:
        self.log.info(
            "Metadata scan finished repository=%s artifacts=%d errors=%d",
            self.repository.id,
            self.processed,
            len(self.errors),
        )
