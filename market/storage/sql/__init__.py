"""SQLAlchemy storage for the market core.

Works against any SQLAlchemy URL; SQLite is the default.

Notes
- We avoid logging connection URLs to prevent accidental secret leakage.
- SQLite connections get ``PRAGMA foreign_keys=ON`` so referential integrity
  is enforced the same way as on a server database.
"""

from .config import DEFAULT_DATABASE_URL, StoreConfig
from .stores import SqlAlchemyMarketStore

__all__ = ["DEFAULT_DATABASE_URL", "SqlAlchemyMarketStore", "StoreConfig"]
