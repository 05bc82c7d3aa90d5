from .coordinate import WILDCARD, Coordinate
from .hierarchy import Artifact, Namespace, Project, Version

__all__ = [
    "WILDCARD",
    "Coordinate",
    "Artifact",
    "Namespace",
    "Project",
    "Version",
]
