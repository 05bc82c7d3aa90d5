"""Process-wide connector configuration with snapshot reads."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

from repocore.settings import Settings

from .domain import (
    CachedFailuresPolicy,
    ChecksumPolicy,
    ConnectorPolicies,
    ProxyConnector,
    RemoteRepository,
    UpdatePolicy,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigurationSnapshot:
    connectors: Tuple[ProxyConnector, ...] = ()
    remotes: Mapping[str, RemoteRepository] = field(default_factory=lambda: MappingProxyType({}))

    def connectors_for(self, source_repo_id: str, include_disabled: bool = False) -> List[ProxyConnector]:
        """Connectors of ``source_repo_id`` in fetch order."""
        selected = [
            connector
            for connector in self.connectors
            if connector.source_repo_id == source_repo_id and (include_disabled or connector.enabled)
        ]
        return sorted(selected, key=lambda connector: connector.order)

    def remote(self, remote_repo_id: str) -> Optional[RemoteRepository]:
        return self.remotes.get(remote_repo_id)


class ConnectorConfiguration:
    """Holds the current connectors and remotes; readers get an immutable snapshot.

    ``replace`` swaps the whole configuration at once, so an in-flight fetch
    keeps working against the snapshot it started with.
    """

    def __init__(
        self,
        connectors: Iterable[ProxyConnector] = (),
        remotes: Iterable[RemoteRepository] = (),
    ) -> None:
        self._lock = threading.Lock()
        self._snapshot = self._build(connectors, remotes)

    @staticmethod
    def _build(connectors: Iterable[ProxyConnector], remotes: Iterable[RemoteRepository]) -> ConfigurationSnapshot:
        return ConfigurationSnapshot(
            connectors=tuple(connectors),
            remotes=MappingProxyType({remote.id: remote for remote in remotes}),
        )

    def snapshot(self) -> ConfigurationSnapshot:
        with self._lock:
            return self._snapshot

    def replace(self, connectors: Iterable[ProxyConnector], remotes: Iterable[RemoteRepository]) -> None:
        snapshot = self._build(connectors, remotes)
        with self._lock:
            self._snapshot = snapshot
        log.info(
            "Connector configuration replaced connectors=%d remotes=%d",
            len(snapshot.connectors),
            len(snapshot.remotes),
        )

    def connectors_for(self, source_repo_id: str, include_disabled: bool = False) -> List[ProxyConnector]:
        return self.snapshot().connectors_for(source_repo_id, include_disabled=include_disabled)

    def proxied_repository_ids(self, source_repo_id: str) -> List[str]:
        """Remote ids whose side-car files may exist for ``source_repo_id``."""
        return [connector.target_repo_id for connector in self.connectors_for(source_repo_id, include_disabled=True)]

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConnectorConfiguration":
        remotes = [
            RemoteRepository(
                id=remote.id,
                url=remote.url,
                layout=remote.layout,
                username=remote.username,
                password=remote.password,
                timeout=remote.timeout or settings.transfer_timeout_seconds,
            )
            for remote in settings.remote_repositories
        ]
        connectors = [
            ProxyConnector(
                source_repo_id=connector.source_repo_id,
                target_repo_id=connector.target_repo_id,
                order=connector.order,
                enabled=connector.enabled,
                policies=ConnectorPolicies(
                    checksum=ChecksumPolicy(connector.policies.checksum.lower()),
                    releases=UpdatePolicy(connector.policies.releases.lower()),
                    snapshots=UpdatePolicy(connector.policies.snapshots.lower()),
                    cached_failures=CachedFailuresPolicy(connector.policies.cached_failures.lower()),
                ),
            )
            for connector in settings.proxy_connectors
        ]
        return cls(connectors=connectors, remotes=remotes)
