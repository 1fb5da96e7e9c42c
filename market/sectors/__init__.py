"""Sector registry and declarative sector sources."""

from .registry import SectorRegistry
from .source import JsonSectorSource, StaticSectorSource

__all__ = ["JsonSectorSource", "SectorRegistry", "StaticSectorSource"]
