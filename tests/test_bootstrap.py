import pytest

from repocore.bootstrap import ServiceContainer, create_container
from repocore.modules.content.layout import LegacyLayout
from repocore.modules.proxy.domain import ChecksumPolicy, UpdatePolicy
from repocore.settings import Settings


def build_settings(tmp_path, **overrides) -> Settings:
    defaults = {
        "repository_root": str(tmp_path / "repositories"),
        "managed_repositories": [
            {"id": "internal"},
            {"id": "legacy", "location": str(tmp_path / "legacy-repo"), "layout": "legacy"},
        ],
        "remote_repositories": [
            {"id": "central", "url": "https://repo.example.com/maven2"},
            {"id": "private", "url": "https://private.example.com", "username": "deploy", "password": "secret", "timeout": 5},
        ],
        "proxy_connectors": [
            {"source_repo_id": "internal", "target_repo_id": "private", "order": 2},
            {
                "source_repo_id": "internal",
                "target_repo_id": "central",
                "order": 1,
                "policies": {"checksum": "FIX", "releases": "daily", "snapshots": "disabled"},
            },
        ],
    }
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)


def test_container_builds_repositories(tmp_path):
    container = ServiceContainer(build_settings(tmp_path))

    internal = container.repository("internal")
    legacy = container.repository("legacy")

    assert internal.storage.root == (tmp_path / "repositories" / "internal").resolve()
    assert legacy.storage.root == (tmp_path / "legacy-repo").resolve()
    assert isinstance(legacy.layout, LegacyLayout)
    with pytest.raises(KeyError):
        container.repository("missing")


def test_connectors_come_from_settings(tmp_path):
    container = ServiceContainer(build_settings(tmp_path))

    connectors = container.configuration.connectors_for("internal")

    assert [connector.target_repo_id for connector in connectors] == ["central", "private"]
    assert connectors[0].policies.checksum is ChecksumPolicy.FIX
    assert connectors[0].policies.releases is UpdatePolicy.DAILY
    assert connectors[0].policies.snapshots is UpdatePolicy.NEVER
    assert container.configuration.snapshot().remote("central").timeout == 30.0
    assert container.configuration.snapshot().remote("private").timeout == 5.0
    assert container.metadata_tools.configuration is container.configuration
    assert container.proxy_handler.failure_cache is container.failure_cache


def test_create_container_uses_given_settings(tmp_path):
    container = create_container(build_settings(tmp_path, log_level="debug"))

    assert container.settings.log_level == "debug"
    assert sorted(container.repositories) == ["internal", "legacy"]


def test_services_share_the_repository(tmp_path):
    container = ServiceContainer(build_settings(tmp_path, retention_count=4))

    assert container.metadata_updater("internal").repository is container.repository("internal")
    assert container.retention_purge("internal").retention_count == 4
    assert container.retention_purge("internal", retention_count=1).retention_count == 1


def test_settings_read_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("REPOCORE_RETENTION_COUNT", "7")
    monkeypatch.setenv("REPOCORE_CHECKSUM_ALGORITHMS", '["sha1"]')

    settings = Settings(_env_file=None)

    assert settings.retention_count == 7
    assert settings.checksum_algorithms == ["sha1"]
