"""Cascading dropdown filters for an admin panel."""

__version__ = "1.0.0"
