"""Filtered views, share links and exports for survey comment analyses."""

__version__ = "0.1.0"
