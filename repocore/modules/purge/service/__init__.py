from .retention import DEFAULT_RETENTION_COUNT, RetentionCountPurge, select_versions_to_purge

__all__ = ["DEFAULT_RETENTION_COUNT", "RetentionCountPurge", "select_versions_to_purge"]
