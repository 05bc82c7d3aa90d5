from .handler import ProxyFetchHandler

__all__ = ["ProxyFetchHandler"]
