"""Artifact coordinates, repository layouts and managed repository content."""
