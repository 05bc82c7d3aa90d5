"""Artifact type <-> file extension tables."""

from __future__ import annotations

import re
from typing import Optional

_TYPE_TO_EXTENSION = {
    "ejb-client": "jar",
    "ejb": "jar",
    "java-source": "jar",
    "javadoc": "jar",
    "test-jar": "jar",
    "maven-plugin": "jar",
    "maven-archetype": "jar",
    "aspect": "jar",
    "uberjar": "jar",
    "distribution-tgz": "tar.gz",
    "distribution-zip": "zip",
}

_CLASSIFIER_EXTENSION_TO_TYPE = {
    "client:jar": "ejb-client",
    "sources:jar": "java-source",
    "javadoc:jar": "javadoc",
    "tests:jar": "test-jar",
}

MAVEN_PLUGIN_PATTERN = re.compile(r"^(?:maven-.*-plugin|.*-maven-plugin)$")


def get_extension(artifact_type: str) -> str:
    return _TYPE_TO_EXTENSION.get(artifact_type, artifact_type)


def map_extension_and_classifier_to_type(
    classifier: Optional[str], extension: str, artifact_id: str
) -> str:
    """Derive the artifact type from what is visible in a filename."""
    if classifier:
        artifact_type = _CLASSIFIER_EXTENSION_TO_TYPE.get(f"{classifier}:{extension}")
        if artifact_type:
            return artifact_type
    elif extension == "jar" and MAVEN_PLUGIN_PATTERN.match(artifact_id):
        return "maven-plugin"
    return extension
