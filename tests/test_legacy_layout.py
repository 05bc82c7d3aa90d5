import pytest

from repocore.modules.content.domain import Coordinate
from repocore.modules.content.layout import LegacyLayout
from repocore.modules.content.util import LayoutException

layout = LegacyLayout()


@pytest.mark.parametrize(
    "path,namespace,artifact_id,version,classifier,artifact_type",
    [
        ("commons-lang/jars/commons-lang-2.1.jar", "commons-lang", "commons-lang", "2.1", None, "jar"),
        ("org.apache.maven/poms/maven-model-2.0.pom", "org.apache.maven", "maven-model", "2.0", None, "pom"),
        ("org.apache.maven/maven-plugins/maven-test-plugin-1.8.2.jar", "org.apache.maven", "maven-test-plugin", "1.8.2", None, "maven-plugin"),
        ("com.foo/java-sources/foo-lib-2.1-alpha-1-sources.jar", "com.foo", "foo-lib", "2.1-alpha-1", "sources", "java-source"),
        ("org.example/distributions/dist-1.0.tar.gz", "org.example", "dist", "1.0", None, "distribution-tgz"),
        ("org.example/distributions/dist-1.0.zip", "org.example", "dist", "1.0", None, "distribution-zip"),
        ("org.example/jars/demo-1.0-SNAPSHOT.jar", "org.example", "demo", "1.0-SNAPSHOT", None, "jar"),
    ],
)
def test_good_paths_parse_and_round_trip(path, namespace, artifact_id, version, classifier, artifact_type):
    coordinate = layout.to_coordinate(path)

    assert coordinate.namespace == namespace
    assert coordinate.artifact_id == artifact_id
    assert coordinate.version == version
    assert coordinate.classifier == classifier
    assert coordinate.type == artifact_type
    assert layout.to_path(coordinate) == path


def test_timestamped_build_keeps_base_version():
    coordinate = layout.to_coordinate("org.example/jars/demo-1.0-20050611.112233-1.jar")

    assert coordinate.version == "1.0-SNAPSHOT"
    assert coordinate.artifact_version == "1.0-20050611.112233-1"
    assert layout.to_path(coordinate) == "org.example/jars/demo-1.0-20050611.112233-1.jar"


@pytest.mark.parametrize(
    "path",
    [
        "commons-lang/commons-lang/2.1/commons-lang-2.1.jar",
        "commons-lang/jar/commons-lang-2.1.jar",
        "commons-lang/jars/commons-lang-2.1.pom",
        "commons-lang/jars/commons-lang.jar",
        "commons-lang/jars/commons-lang-2.1",
        "org.example/distributions/dist-1.0.rar",
        "commons-lang-2.1.jar",
        None,
    ],
)
def test_bad_paths_are_rejected(path):
    with pytest.raises(LayoutException):
        layout.to_coordinate(path)


def test_to_path_for_distribution():
    coordinate = Coordinate(namespace="org.example", artifact_id="dist", version="1.0", type="distribution-zip")

    assert layout.to_path(coordinate) == "org.example/distributions/dist-1.0.zip"
