from .connector import (
    CachedFailuresPolicy,
    ChecksumPolicy,
    ConnectorPolicies,
    ProxyConnector,
    RemoteRepository,
    UpdatePolicy,
)
from .outcome import ConnectorOutcome, OutcomeStatus, ProxyFetchResult

__all__ = [
    "CachedFailuresPolicy",
    "ChecksumPolicy",
    "ConnectorPolicies",
    "ProxyConnector",
    "RemoteRepository",
    "UpdatePolicy",
    "ConnectorOutcome",
    "OutcomeStatus",
    "ProxyFetchResult",
]
