from .tools import MetadataTools, get_repository_specific_name
from .updater import ConsumerError, MetadataUpdater

__all__ = ["MetadataTools", "get_repository_specific_name", "ConsumerError", "MetadataUpdater"]
