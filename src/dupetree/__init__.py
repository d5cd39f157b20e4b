"""dupetree - find files that duplicate a target tree elsewhere on disk."""

__version__ = "0.1.0"
