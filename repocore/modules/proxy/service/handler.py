"""Cascading fetch of metadata documents from a repository's remote connectors."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Optional, Tuple

from repocore.modules.content.layout import is_metadata
from repocore.modules.content.repositories import ManagedRepositoryContent
from repocore.modules.content.util import is_snapshot
from repocore.modules.metadata.codec import read_metadata
from repocore.modules.metadata.domain import MetadataDocument
from repocore.modules.metadata.merge import merge_metadata
from repocore.modules.metadata.service import MetadataTools, get_repository_specific_name
from repocore.modules.metadata.util import RepositoryMetadataException
from repocore.modules.proxy.cache import UrlFailureCache
from repocore.modules.proxy.config import ConfigurationSnapshot, ConnectorConfiguration
from repocore.modules.proxy.domain import (
    CachedFailuresPolicy,
    ConnectorOutcome,
    OutcomeStatus,
    ProxyConnector,
    ProxyFetchResult,
    RemoteRepository,
)
from repocore.modules.proxy.policies import (
    PolicyViolation,
    apply_checksum_fix,
    check_pre_download,
    verify_checksum,
)
from repocore.modules.proxy.transport import (
    RemoteTransport,
    ResourceDoesNotExistException,
    TransferFailedException,
)


class ProxyFetchHandler:
    """Tries each enabled connector in order and merges what they return.

    Each successful download is kept as a per-remote side-car file next to the
    canonical document; the canonical document becomes the merge of the local
    copy and every side-car fetched during the request. Transfer failures stay
    inside the cascade and only show up in the per-connector outcomes.
    """

    def __init__(
        self,
        configuration: ConnectorConfiguration,
        tools: MetadataTools,
        transport: RemoteTransport,
        failure_cache: Optional[UrlFailureCache] = None,
    ) -> None:
        self.configuration = configuration
        self.tools = tools
        self.transport = transport
        self.failure_cache = failure_cache or UrlFailureCache()
        self.log = logging.getLogger(self.__class__.__name__)

    def fetch_metadata_from_proxies(self, repository: ManagedRepositoryContent, path: str) -> ProxyFetchResult:
        path = path.strip().replace("\\", "/").lstrip("/")
        if not is_metadata(path):
            raise ValueError(f"Not a metadata path: {path}")

        result = ProxyFetchResult(path=path)
        with self.tools.hold(repository, path):
            start = time.time()
            snapshot = self.configuration.snapshot()
            connectors = snapshot.connectors_for(repository.id)
            version = self.tools.version_of(path)
            is_snapshot_request = None if version is None else is_snapshot(version)

            merged = self.tools.read_metadata_or_none(repository, path)
            fetched = False
            for connector in connectors:
                outcome, document = self._fetch_from_connector(
                    repository, path, connector, snapshot, is_snapshot_request
                )
                result.outcomes.append(outcome)
                if document is None:
                    continue
                fetched = True
                merged = merge_metadata(merged or MetadataDocument(), document)

            if not fetched:
                if repository.storage.exists(path):
                    result.asset = path
                else:
                    self.log.info(
                        "Metadata not found locally or on any proxy repository=%s path=%s connectors=%d",
                        repository.id,
                        path,
                        len(connectors),
                    )
                return result

            result.asset = path
            if self.tools.is_current(repository, path, start):
                self.log.info("Canonical metadata changed during fetch, keeping it repository=%s path=%s", repository.id, path)
                return result
            self.tools.write_metadata(repository, path, merged)
            result.modified = True
            self.log.info(
                "Merged proxied metadata repository=%s path=%s remotes=%s",
                repository.id,
                path,
                ",".join(result.fetched_from),
            )
            return result

    def _fetch_from_connector(
        self,
        repository: ManagedRepositoryContent,
        path: str,
        connector: ProxyConnector,
        snapshot: ConfigurationSnapshot,
        is_snapshot_request: Optional[bool],
    ) -> Tuple[ConnectorOutcome, Optional[MetadataDocument]]:
        remote_id = connector.target_repo_id
        remote = snapshot.remote(remote_id)
        if remote is None:
            self.log.warning("Connector target is not configured source=%s target=%s", connector.source_repo_id, remote_id)
            return ConnectorOutcome(remote_id, OutcomeStatus.SKIPPED, "remote repository not configured"), None

        storage = repository.storage
        policies = connector.policies
        side_car = get_repository_specific_name(remote_id, path)
        url = remote.url_for(path)
        try:
            check_pre_download(policies, storage, side_car, url, self.failure_cache, is_snapshot_request)
        except PolicyViolation as exc:
            self.log.debug("Skipping connector target=%s path=%s: %s", remote_id, path, exc)
            return ConnectorOutcome(remote_id, OutcomeStatus.SKIPPED, str(exc)), None

        directory = side_car.rpartition("/")[0]
        temp = f"{directory}/.{remote_id}.{uuid.uuid4().hex}.part"
        try:
            self.transport.fetch(remote, path, storage.local_path(temp))
            data = storage.read_bytes(temp)
            document = read_metadata(data, source=url)
            verify_checksum(
                policies.checksum, data, lambda algorithm: self._fetch_checksum(repository, remote, path, algorithm)
            )
            storage.move(temp, side_car)
            apply_checksum_fix(policies.checksum, storage, side_car, self.tools.checksum_algorithms)
        except ResourceDoesNotExistException as exc:
            self._remember_failure(connector, url)
            self.log.info("Metadata not found on remote=%s url=%s", remote_id, url)
            return ConnectorOutcome(remote_id, OutcomeStatus.NOT_FOUND, str(exc)), None
        except TransferFailedException as exc:
            self._remember_failure(connector, url)
            self.log.warning("Transfer failed remote=%s url=%s: %s", remote_id, url, exc)
            return ConnectorOutcome(remote_id, OutcomeStatus.FAILED, str(exc)), None
        except (RepositoryMetadataException, PolicyViolation) as exc:
            self.log.warning("Rejected metadata from remote=%s url=%s: %s", remote_id, url, exc)
            return ConnectorOutcome(remote_id, OutcomeStatus.FAILED, str(exc)), None
        finally:
            storage.delete(temp)

        self.log.debug("Fetched metadata remote=%s path=%s -> %s", remote_id, path, side_car)
        return ConnectorOutcome(remote_id, OutcomeStatus.FETCHED), document

    def _fetch_checksum(
        self,
        repository: ManagedRepositoryContent,
        remote: RemoteRepository,
        path: str,
        algorithm: str,
    ) -> Optional[bytes]:
        temp = f"{path.rpartition('/')[0]}/.{remote.id}.{uuid.uuid4().hex}.{algorithm}.part"
        try:
            self.transport.fetch(remote, f"{path}.{algorithm}", repository.storage.local_path(temp))
            return repository.storage.read_bytes(temp)
        except TransferFailedException:
            return None
        finally:
            repository.storage.delete(temp)

    def _remember_failure(self, connector: ProxyConnector, url: str) -> None:
        if connector.policies.cached_failures is CachedFailuresPolicy.YES:
            self.failure_cache.cache_failure(url)
