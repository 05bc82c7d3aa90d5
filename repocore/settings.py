"""Runtime configuration for the repository core."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ManagedRepositorySettings(BaseModel):
    id: str
    location: Optional[str] = None
    layout: str = "default"


class RemoteRepositorySettings(BaseModel):
    id: str
    url: str
    layout: str = "default"
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: Optional[float] = None


class ConnectorPolicySettings(BaseModel):
    checksum: str = "ignore"
    releases: str = "always"
    snapshots: str = "always"
    cached_failures: str = "no"


class ProxyConnectorSettings(BaseModel):
    source_repo_id: str
    target_repo_id: str
    order: int = 0
    enabled: bool = True
    policies: ConnectorPolicySettings = Field(default_factory=ConnectorPolicySettings)


class Settings(BaseSettings):
    """Configuration values mapped from ``REPOCORE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REPOCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field("repocore")
    version: str = Field("0.1.0")
    log_level: str = Field("INFO")

    # Local storage; a managed repository without a location lives in <root>/<id>
    repository_root: str = Field("./data/repositories")
    managed_repositories: List[ManagedRepositorySettings] = Field(default_factory=list)

    # Proxying
    remote_repositories: List[RemoteRepositorySettings] = Field(default_factory=list)
    proxy_connectors: List[ProxyConnectorSettings] = Field(default_factory=list)
    transfer_timeout_seconds: float = Field(30.0)
    failure_cache_ttl_seconds: float = Field(3600.0)
    failure_cache_max_entries: int = Field(10_000)

    # Metadata and purge
    checksum_algorithms: List[str] = Field(default_factory=lambda: ["sha1", "md5"])
    retention_count: int = Field(2, ge=0)


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
