from .base import RepositoryStorage
from .filesystem import FilesystemStorage
from .managed import ManagedRepositoryContent

__all__ = ["RepositoryStorage", "FilesystemStorage", "ManagedRepositoryContent"]
