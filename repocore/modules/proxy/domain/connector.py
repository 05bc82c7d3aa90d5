"""Connector, remote repository and policy values."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ChecksumPolicy(str, Enum):
    IGNORE = "ignore"
    FIX = "fix"
    FAIL = "fail"


class UpdatePolicy(str, Enum):
    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    ONCE = "once"
    NEVER = "never"

    @classmethod
    def _missing_(cls, value: object) -> Optional["UpdatePolicy"]:
        if isinstance(value, str) and value.lower() in ("ignore", "disabled"):
            return cls.NEVER
        return None


class CachedFailuresPolicy(str, Enum):
    YES = "yes"
    NO = "no"


@dataclass(frozen=True)
class ConnectorPolicies:
    checksum: ChecksumPolicy = ChecksumPolicy.IGNORE
    releases: UpdatePolicy = UpdatePolicy.ALWAYS
    snapshots: UpdatePolicy = UpdatePolicy.ALWAYS
    cached_failures: CachedFailuresPolicy = CachedFailuresPolicy.NO


@dataclass(frozen=True)
class ProxyConnector:
    """Links a managed repository to one remote repository it proxies."""

    source_repo_id: str
    target_repo_id: str
    order: int = 0
    enabled: bool = True
    policies: ConnectorPolicies = field(default_factory=ConnectorPolicies)


@dataclass(frozen=True)
class RemoteRepository:
    id: str
    url: str
    layout: str = "default"
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: float = 30.0

    def url_for(self, path: str) -> str:
        return f"{self.url.rstrip('/')}/{path.lstrip('/')}"
