"""Pre- and post-download policies applied per connector."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Sequence

from repocore.modules.content.repositories import RepositoryStorage
from repocore.modules.metadata.util import fix_checksums, is_valid_checksum

from .cache import UrlFailureCache
from .domain import CachedFailuresPolicy, ChecksumPolicy, ConnectorPolicies, UpdatePolicy

log = logging.getLogger(__name__)

HOUR_SECONDS = 60 * 60
DAY_SECONDS = 24 * HOUR_SECONDS

REMOTE_CHECKSUM_ALGORITHMS = ("sha1", "md5")


class PolicyViolation(RuntimeError):
    """Raised when a policy forbids using a connector for a request."""


def check_update_policy(policy: UpdatePolicy, storage: RepositoryStorage, local_path: str) -> Optional[str]:
    """Reason to skip the download, or ``None`` to go ahead."""
    if policy is UpdatePolicy.ALWAYS:
        return None
    if policy is UpdatePolicy.NEVER:
        return "update policy is never"
    if not storage.exists(local_path):
        return None
    if policy is UpdatePolicy.ONCE:
        return "already fetched once"
    age = time.time() - storage.modification_time(local_path)
    if policy is UpdatePolicy.DAILY and age < DAY_SECONDS:
        return "fetched within the last day"
    if policy is UpdatePolicy.HOURLY and age < HOUR_SECONDS:
        return "fetched within the last hour"
    return None


def check_pre_download(
    policies: ConnectorPolicies,
    storage: RepositoryStorage,
    local_path: str,
    url: str,
    failure_cache: UrlFailureCache,
    snapshot: Optional[bool],
) -> None:
    """Raise :class:`PolicyViolation` when the connector must not be tried.

    ``snapshot`` is ``None`` for project or group metadata; such requests are
    refused only when both the release and the snapshot policy refuse them.
    """
    if snapshot is None:
        candidates = [policies.releases, policies.snapshots]
    else:
        candidates = [policies.snapshots if snapshot else policies.releases]
    reasons = [check_update_policy(policy, storage, local_path) for policy in candidates]
    if all(reasons):
        raise PolicyViolation(reasons[0])

    if policies.cached_failures is CachedFailuresPolicy.YES and failure_cache.has_failed_before(url):
        raise PolicyViolation(f"url failed recently: {url}")


def verify_checksum(
    policy: ChecksumPolicy,
    data: bytes,
    fetch_checksum: Callable[[str], Optional[bytes]],
) -> None:
    """Check a downloaded body against the remote's checksum files under ``fail``."""
    if policy is not ChecksumPolicy.FAIL:
        return
    for algorithm in REMOTE_CHECKSUM_ALGORITHMS:
        remote_checksum = fetch_checksum(algorithm)
        if remote_checksum is None:
            continue
        if is_valid_checksum(data, algorithm, remote_checksum):
            return
        raise PolicyViolation(f"{algorithm} checksum does not match, policy set to fail")
    raise PolicyViolation("no remote checksum available, policy set to fail")


def apply_checksum_fix(
    policy: ChecksumPolicy,
    storage: RepositoryStorage,
    path: str,
    algorithms: Sequence[str],
) -> None:
    if policy is ChecksumPolicy.FIX:
        fix_checksums(storage, path, algorithms)
