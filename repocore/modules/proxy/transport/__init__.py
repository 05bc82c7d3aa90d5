from .base import RemoteTransport, ResourceDoesNotExistException, TransferFailedException
from .http import HttpxTransport

__all__ = ["RemoteTransport", "ResourceDoesNotExistException", "TransferFailedException", "HttpxTransport"]
