"""Per-connector results of a proxy fetch."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class OutcomeStatus(str, Enum):
    FETCHED = "fetched"
    SKIPPED = "skipped"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class ConnectorOutcome:
    remote_repo_id: str
    status: OutcomeStatus
    reason: Optional[str] = None


@dataclass
class ProxyFetchResult:
    """``asset`` is the local path that now answers the request, or ``None``."""

    path: str
    asset: Optional[str] = None
    outcomes: List[ConnectorOutcome] = field(default_factory=list)
    modified: bool = False

    @property
    def found(self) -> bool:
        return self.asset is not None

    @property
    def fetched_from(self) -> List[str]:
        return [outcome.remote_repo_id for outcome in self.outcomes if outcome.status is OutcomeStatus.FETCHED]
