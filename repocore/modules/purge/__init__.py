"""Retention-based purge of snapshot builds."""
