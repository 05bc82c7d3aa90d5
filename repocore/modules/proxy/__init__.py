"""Cascading metadata fetches across remote repositories."""
