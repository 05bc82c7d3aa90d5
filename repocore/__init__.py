"""Layout, metadata, proxy and purge core of a Maven-style artifact repository."""

__version__ = "0.1.0"
