"""Storage implementations of the ``MarketStore`` protocol.

- ``InMemoryMarketStore``: process-local, used by tests and dry runs
- ``SqlAlchemyMarketStore``: SQLite by default, any SQLAlchemy URL
"""

from .memory import InMemoryMarketStore
from .sql import DEFAULT_DATABASE_URL, SqlAlchemyMarketStore, StoreConfig

__all__ = ["DEFAULT_DATABASE_URL", "InMemoryMarketStore", "SqlAlchemyMarketStore", "StoreConfig"]
