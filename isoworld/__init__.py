"""Isometric terrain editor: sculpt, paint, rotate and save tile maps."""

__version__ = "0.1.0"
__all__ = ["app", "cformat", "editor", "geometry", "numutils", "render", "terrain", "textutils"]