"""Multi-entity market core.

- domain: sectors, agents, ledgers and stock records with their invariants
- sectors: sector registry bootstrap and JSON sector source
- assembly: agent assembly line, batch pipeline and random generator
- persistence: store / source protocols
- storage: in-memory and SQLAlchemy stores
- reporting: console report of the assembled market
"""

from market.errors import InvalidArgument, MarketError, PreconditionFailed, SourceUnavailable

__all__ = ["InvalidArgument", "MarketError", "PreconditionFailed", "SourceUnavailable"]
