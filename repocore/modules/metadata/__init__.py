"""Metadata documents, synthesis and merging."""
