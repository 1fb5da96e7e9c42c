"""Persistence boundary.

These protocols define what the market core needs from its collaborators.
Implementations live in ``market.storage`` (in-memory and SQLAlchemy) and
``market.sectors.source`` (JSON seed file).
"""

from .interfaces import MarketStore, SectorSource

__all__ = ["MarketStore", "SectorSource"]
