import os

import pytest

from repocore.modules.content.domain import Coordinate
from repocore.modules.content.repositories import FilesystemStorage, ManagedRepositoryContent
from repocore.modules.metadata.codec import read_metadata, write_metadata
from repocore.modules.metadata.domain import MetadataDocument, Plugin, SnapshotVersion
from repocore.modules.metadata.service import MetadataTools, get_repository_specific_name
from repocore.modules.metadata.util import ContentNotFoundException, RepositoryMetadataException
from repocore.modules.proxy.config import ConnectorConfiguration
from repocore.modules.proxy.domain import ProxyConnector

OLD_MTIME = 1_000_000_000


def make_repository(tmp_path, repository_id="internal"):
    return ManagedRepositoryContent(repository_id, FilesystemStorage(tmp_path / repository_id))


def make_tools(*remote_ids, source="internal"):
    connectors = [
        ProxyConnector(source_repo_id=source, target_repo_id=remote_id, order=index)
        for index, remote_id in enumerate(remote_ids)
    ]
    return MetadataTools(ConnectorConfiguration(connectors=connectors))


def touch(repository, *paths):
    for path in paths:
        repository.storage.write_bytes(path, b"content")


def age(repository, path):
    os.utime(repository.storage.local_path(path), (OLD_MTIME, OLD_MTIME))


def stored(repository, path):
    return read_metadata(repository.storage.read_bytes(path))


def test_to_path_for_each_level():
    tools = make_tools()

    assert tools.to_path(Coordinate(namespace="org.apache.maven")) == "org/apache/maven/maven-metadata.xml"
    assert tools.to_path(Coordinate(namespace="commons-lang", project_id="commons-lang")) == (
        "commons-lang/commons-lang/maven-metadata.xml"
    )
    assert tools.to_path(Coordinate(namespace="commons-lang", project_id="commons-lang", version="2.1")) == (
        "commons-lang/commons-lang/2.1/maven-metadata.xml"
    )


def test_metadata_path_to_coordinates():
    tools = make_tools()

    project = tools.to_project_coordinate("org/apache/maven/shared/maven-downloader/maven-metadata.xml")
    version = tools.to_version_coordinate("org/apache/maven/shared/maven-downloader/1.1/maven-metadata.xml")

    assert (project.namespace, project.project_id) == ("org.apache.maven.shared", "maven-downloader")
    assert (version.namespace, version.project_id, version.version) == ("org.apache.maven.shared", "maven-downloader", "1.1")
    assert tools.version_of("org/apache/maven/shared/maven-downloader/maven-metadata.xml") is None
    assert tools.version_of("org/apache/maven/shared/maven-downloader/1.0-SNAPSHOT/maven-metadata.xml") == "1.0-SNAPSHOT"


@pytest.mark.parametrize("path", ["maven-metadata.xml", "org/apache/maven/shared/maven-downloader-1.1.jar"])
def test_metadata_path_errors(path):
    with pytest.raises(RepositoryMetadataException):
        make_tools().to_project_coordinate(path)


def test_repository_specific_name():
    assert get_repository_specific_name("central", "commons-lang/commons-lang/maven-metadata.xml") == (
        "commons-lang/commons-lang/maven-metadata-central.xml"
    )
    assert MetadataTools.get_repository_specific_name("central", "maven-metadata.xml") == "maven-metadata-central.xml"


def test_update_project_metadata_lists_versions_with_artifacts(tmp_path):
    repository = make_repository(tmp_path)
    tools = make_tools()
    touch(
        repository,
        "commons-lang/commons-lang/2.0/commons-lang-2.0.jar",
        "commons-lang/commons-lang/2.1/commons-lang-2.1.jar",
        "commons-lang/commons-lang/2.1/commons-lang-2.1.pom",
        "commons-lang/commons-lang/2.2/commons-lang-2.2.jar.sha1",
    )
    repository.storage.local_path("commons-lang/commons-lang/3.0").mkdir(parents=True)

    document = tools.update_project_metadata(repository, Coordinate(namespace="commons-lang", project_id="commons-lang"))

    path = "commons-lang/commons-lang/maven-metadata.xml"
    assert document.versions == ("2.0", "2.1")
    assert document.latest == "2.1"
    assert document.release == "2.1"
    assert stored(repository, path) == document
    assert repository.storage.exists(path + ".sha1")
    assert repository.storage.exists(path + ".md5")


def test_release_skips_snapshot_versions(tmp_path):
    repository = make_repository(tmp_path)
    touch(
        repository,
        "org/example/demo/1.0/demo-1.0.jar",
        "org/example/demo/1.1-SNAPSHOT/demo-1.1-20070821.213044-8.jar",
    )

    document = make_tools().update_project_metadata(repository, Coordinate(namespace="org.example", project_id="demo"))

    assert document.versions == ("1.0", "1.1-SNAPSHOT")
    assert document.latest == "1.1-SNAPSHOT"
    assert document.release == "1.0"


def test_project_metadata_includes_proxied_versions(tmp_path):
    repository = make_repository(tmp_path)
    tools = make_tools("central", "snapshots")
    touch(repository, "org/example/demo/1.0/demo-1.0.jar")
    side_car = MetadataDocument(group_id="org.example", artifact_id="demo", last_updated="20070821213044").with_versions(
        ["1.0", "3.0"]
    )
    repository.storage.write_bytes("org/example/demo/maven-metadata-central.xml", write_metadata(side_car))
    repository.storage.write_bytes("org/example/demo/maven-metadata-snapshots.xml", b"<metadata><versioning>")

    document = tools.update_project_metadata(repository, Coordinate(namespace="org.example", project_id="demo"))

    assert document.versions == ("1.0", "3.0")
    assert document.latest == "3.0"
    assert document.last_updated == "20070821213044"


def test_project_metadata_keeps_existing_plugins(tmp_path):
    repository = make_repository(tmp_path)
    touch(repository, "org/example/demo/1.0/demo-1.0.jar")
    path = "org/example/demo/maven-metadata.xml"
    existing = MetadataDocument(
        group_id="org.example",
        artifact_id="demo",
        plugins=(Plugin(prefix="demo", artifact_id="demo-maven-plugin"),),
    )
    repository.storage.write_bytes(path, write_metadata(existing))
    age(repository, path)

    document = make_tools().update_project_metadata(repository, Coordinate(namespace="org.example", project_id="demo"))

    assert document.versions == ("1.0",)
    assert document.plugins == existing.plugins


def test_group_metadata_with_plugins_only(tmp_path):
    repository = make_repository(tmp_path)
    touch(repository, "org/apache/maven/plugins/maven-compiler-plugin/2.0/maven-compiler-plugin-2.0.jar")
    path = "org/apache/maven/plugins/maven-metadata.xml"
    existing = MetadataDocument(
        group_id="org.apache.maven.plugins",
        plugins=(Plugin(prefix="compiler", artifact_id="maven-compiler-plugin"),),
    )
    repository.storage.write_bytes(path, write_metadata(existing))
    age(repository, path)

    document = make_tools().update_metadata(repository, path)

    assert document.group_id == "org.apache.maven.plugins"
    assert document.artifact_id is None
    assert document.versions == ()
    assert document.plugins == existing.plugins


def test_project_without_versions_writes_nothing(tmp_path):
    repository = make_repository(tmp_path)
    repository.storage.local_path("org/example/empty/1.0").mkdir(parents=True)

    document = make_tools().update_project_metadata(repository, Coordinate(namespace="org.example", project_id="empty"))

    assert document is None
    assert not repository.storage.exists("org/example/empty/maven-metadata.xml")


def test_metadata_written_after_scan_start_is_not_overwritten(tmp_path):
    repository = make_repository(tmp_path)
    touch(repository, "org/example/demo/1.0/demo-1.0.jar", "org/example/demo/2.0/demo-2.0.jar")
    path = "org/example/demo/maven-metadata.xml"
    fresh = MetadataDocument(group_id="org.example", artifact_id="demo").with_versions(["1.0"])
    repository.storage.write_bytes(path, write_metadata(fresh))
    scan_start = repository.storage.modification_time(path) - 60

    document = make_tools().update_project_metadata(
        repository, Coordinate(namespace="org.example", project_id="demo"), scan_start=scan_start
    )

    assert document is None
    assert stored(repository, path) == fresh


def test_release_version_metadata(tmp_path):
    repository = make_repository(tmp_path)
    touch(repository, "commons-lang/commons-lang/2.1/commons-lang-2.1.jar")

    document = make_tools().update_version_metadata(
        repository, Coordinate(namespace="commons-lang", project_id="commons-lang", version="2.1")
    )

    assert document == MetadataDocument(group_id="commons-lang", artifact_id="commons-lang", version="2.1")
    assert stored(repository, "commons-lang/commons-lang/2.1/maven-metadata.xml") == document


def test_release_version_without_artifacts_is_content_not_found(tmp_path):
    repository = make_repository(tmp_path)
    repository.storage.local_path("commons-lang/commons-lang/2.1").mkdir(parents=True)

    with pytest.raises(ContentNotFoundException):
        make_tools().update_version_metadata(
            repository, Coordinate(namespace="commons-lang", project_id="commons-lang", version="2.1")
        )


def test_snapshot_version_metadata_uses_latest_build(tmp_path):
    repository = make_repository(tmp_path)
    touch(
        repository,
        "org/example/demo/1.0-SNAPSHOT/demo-1.0-20070820.000000-12.jar",
        "org/example/demo/1.0-SNAPSHOT/demo-1.0-20070821.213044-8.jar",
        "org/example/demo/1.0-SNAPSHOT/demo-1.0-20070821.213044-10.jar",
        "org/example/demo/1.0-SNAPSHOT/demo-1.0-20070821.213044-10.pom",
    )

    document = make_tools().update_metadata(repository, "org/example/demo/1.0-SNAPSHOT/maven-metadata.xml")

    assert document.version == "1.0-SNAPSHOT"
    assert document.snapshot == SnapshotVersion(timestamp="20070821.213044", build_number=10)
    assert document.last_updated == "20070821213044"


def test_snapshot_version_metadata_prefers_newer_proxied_build(tmp_path):
    repository = make_repository(tmp_path)
    tools = make_tools("snapshots")
    touch(repository, "org/example/demo/1.0-SNAPSHOT/demo-1.0-20070821.213044-8.jar")
    side_car = MetadataDocument(
        group_id="org.example",
        artifact_id="demo",
        version="1.0-SNAPSHOT",
        snapshot=SnapshotVersion(timestamp="20070823.212711", build_number=6),
    )
    repository.storage.write_bytes("org/example/demo/1.0-SNAPSHOT/maven-metadata-snapshots.xml", write_metadata(side_car))

    document = tools.update_metadata(repository, "org/example/demo/1.0-SNAPSHOT/maven-metadata.xml")

    assert document.snapshot.resolve(document.version) == "1.0-20070823.212711-6"


def test_generic_snapshot_has_no_snapshot_block(tmp_path):
    repository = make_repository(tmp_path)
    touch(repository, "org/example/demo/1.0-SNAPSHOT/demo-1.0-SNAPSHOT.jar")

    document = make_tools().update_metadata(repository, "org/example/demo/1.0-SNAPSHOT/maven-metadata.xml")

    assert document == MetadataDocument(group_id="org.example", artifact_id="demo", version="1.0-SNAPSHOT")


def test_snapshot_without_builds_is_content_not_found(tmp_path):
    repository = make_repository(tmp_path)
    touch(repository, "org/example/demo/1.0-SNAPSHOT/readme.txt")

    with pytest.raises(ContentNotFoundException):
        make_tools().update_metadata(repository, "org/example/demo/1.0-SNAPSHOT/maven-metadata.xml")


def test_version_metadata_written_after_scan_start_is_not_overwritten(tmp_path):
    repository = make_repository(tmp_path)
    touch(repository, "org/example/demo/1.0-SNAPSHOT/demo-1.0-20070821.213044-8.jar")
    path = "org/example/demo/1.0-SNAPSHOT/maven-metadata.xml"
    fresh = MetadataDocument(
        group_id="org.example",
        artifact_id="demo",
        version="1.0-SNAPSHOT",
        snapshot=SnapshotVersion(timestamp="20070823.212711", build_number=6),
    )
    repository.storage.write_bytes(path, write_metadata(fresh))
    scan_start = repository.storage.modification_time(path) - 60

    document = make_tools().update_version_metadata(
        repository, Coordinate(namespace="org.example", project_id="demo", version="1.0-SNAPSHOT"), scan_start=scan_start
    )

    assert document is None
    assert stored(repository, path) == fresh


@pytest.mark.parametrize(
    "path,expected",
    [
        ("org/apache/maven/m2/maven-metadata.xml", None),
        ("org/apache/maven/rc/maven-metadata.xml", None),
        ("org/apache/maven/shared/maven-downloader/1.1/maven-metadata.xml", "1.1"),
        ("javax/comm/3.0-u1/maven-metadata.xml", "3.0-u1"),
    ],
)
def test_version_of_needs_a_version_directory(path, expected):
    assert make_tools().version_of(path) == expected
