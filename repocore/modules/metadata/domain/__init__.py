from .document import MetadataDocument, Plugin, SnapshotVersion

__all__ = ["MetadataDocument", "Plugin", "SnapshotVersion"]
