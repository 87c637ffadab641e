"""Shared utilities: logging and query building."""
