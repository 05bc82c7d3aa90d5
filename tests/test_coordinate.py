import pytest

from repocore.modules.content.domain import Coordinate


def test_artifact_version_defaults_to_version():
    coordinate = Coordinate(namespace="org.example", artifact_id="demo", version="1.0", type="jar")

    assert coordinate.project_id == "demo"
    assert coordinate.artifact_version == "1.0"
    assert not coordinate.is_snapshot


def test_project_id_fills_artifact_id():
    coordinate = Coordinate(namespace="org.example", project_id="demo")

    assert coordinate.artifact_id == "demo"
    assert coordinate.namespace_path == "org/example"


def test_timestamped_version_is_normalised_to_base():
    coordinate = Coordinate(namespace="org.example", artifact_id="demo", version="1.0-20050611.112233-1")

    assert coordinate.version == "1.0-SNAPSHOT"
    assert coordinate.artifact_version == "1.0-20050611.112233-1"
    assert coordinate.is_snapshot


def test_snapshot_build_under_matching_base():
    coordinate = Coordinate(
        namespace="org.example",
        artifact_id="demo",
        version="1.0-SNAPSHOT",
        artifact_version="1.0-20050611.112233-1",
    )

    assert coordinate.with_artifact_version("1.0-20050612.000000-2").artifact_version == "1.0-20050612.000000-2"


def test_blank_fields_are_absent():
    coordinate = Coordinate(namespace="org.example", artifact_id="demo", version="1.0", classifier="  ")

    assert coordinate.classifier is None


@pytest.mark.parametrize(
    "version,artifact_version",
    [
        ("1.0", "1.0-20050611.112233-1"),
        ("2.0-SNAPSHOT", "1.0-20050611.112233-1"),
        ("1.0-SNAPSHOT", "1.0"),
        ("1.0", "1.1"),
        (None, "1.0"),
    ],
)
def test_contradictory_versions_are_rejected(version, artifact_version):
    with pytest.raises(ValueError):
        Coordinate(namespace="org.example", artifact_id="demo", version=version, artifact_version=artifact_version)


def test_wildcard_classifier():
    assert Coordinate(namespace="g", artifact_id="a", version="1.0", classifier="*").has_wildcard_classifier


def test_str_renders_gav():
    coordinate = Coordinate(namespace="g", artifact_id="a", version="1.0", classifier="sources", type="java-source")

    assert str(coordinate) == "g:a:1.0:sources:java-source"
