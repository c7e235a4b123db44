"""Application settings for ChronoLens."""

from .config import Settings, settings

__all__ = ["Settings", "settings"]
