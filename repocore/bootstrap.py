"""Wires the repository services from settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from .locks import PathLockRegistry
from .logging_config import configure_logging
from .modules.content.repositories import FilesystemStorage, ManagedRepositoryContent
from .modules.metadata.service import MetadataTools, MetadataUpdater
from .modules.proxy.cache import UrlFailureCache
from .modules.proxy.config import ConnectorConfiguration
from .modules.proxy.service import ProxyFetchHandler
from .modules.proxy.transport import HttpxTransport, RemoteTransport
from .modules.purge.listeners import StorageArtifactDeleter
from .modules.purge.service import RetentionCountPurge
from .settings import Settings, get_settings

log = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Container that wires plain-Python services with shared settings."""

    settings: Settings
    transport: Optional[RemoteTransport] = None
    configuration: ConnectorConfiguration = field(init=False)
    locks: PathLockRegistry = field(init=False)
    metadata_tools: MetadataTools = field(init=False)
    failure_cache: UrlFailureCache = field(init=False)
    proxy_handler: ProxyFetchHandler = field(init=False)
    deleter: StorageArtifactDeleter = field(init=False)
    repositories: Dict[str, ManagedRepositoryContent] = field(init=False)

    def __post_init__(self) -> None:
        self.configuration = ConnectorConfiguration.from_settings(self.settings)
        self.locks = PathLockRegistry()
        self.metadata_tools = MetadataTools(
            self.configuration,
            locks=self.locks,
            checksum_algorithms=self.settings.checksum_algorithms,
        )
        self.failure_cache = UrlFailureCache(
            ttl_seconds=self.settings.failure_cache_ttl_seconds,
            max_entries=self.settings.failure_cache_max_entries,
        )
        if self.transport is None:
            self.transport = HttpxTransport(timeout=self.settings.transfer_timeout_seconds)
        self.proxy_handler = ProxyFetchHandler(
            self.configuration,
            self.metadata_tools,
            self.transport,
            failure_cache=self.failure_cache,
        )
        self.deleter = StorageArtifactDeleter()

        root = Path(self.settings.repository_root)
        self.repositories = {}
        for managed in self.settings.managed_repositories:
            location = Path(managed.location) if managed.location else root / managed.id
            self.repositories[managed.id] = ManagedRepositoryContent(
                managed.id,
                FilesystemStorage(location),
                layout=managed.layout,
            )
        log.info(
            "Services ready repositories=%s connectors=%d",
            ",".join(self.repositories) or "-",
            len(self.configuration.snapshot().connectors),
        )

    def repository(self, repository_id: str) -> ManagedRepositoryContent:
        try:
            return self.repositories[repository_id]
        except KeyError:
            raise KeyError(f"Unknown managed repository {repository_id!r}") from None

    def metadata_updater(self, repository_id: str) -> MetadataUpdater:
        return MetadataUpdater(self.repository(repository_id), self.metadata_tools)

    def retention_purge(self, repository_id: str, retention_count: Optional[int] = None) -> RetentionCountPurge:
        return RetentionCountPurge(
            self.repository(repository_id),
            deleter=self.deleter,
            retention_count=self.settings.retention_count if retention_count is None else retention_count,
        )


def create_container(settings: Optional[Settings] = None) -> ServiceContainer:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    return ServiceContainer(settings)
