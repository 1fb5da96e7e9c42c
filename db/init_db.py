#!/usr/bin/env python3
"""Initialize the market database schema.

Creates the tables declared in db/models against MARKET_DATABASE_URL
(default: a local SQLite file).

Usage:
  python -m db.init_db            # create missing tables
  python -m db.init_db --reset    # drop and recreate every market table
"""

from __future__ import annotations

import argparse
import logging

from market.errors import SourceUnavailable
from market.storage.sql import SqlAlchemyMarketStore, StoreConfig


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create (or reset) the market schema")
    parser.add_argument("--reset", action="store_true", help="Drop existing market tables first")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    store = SqlAlchemyMarketStore(config=StoreConfig.from_env())
    try:
        store.init_schema(reset=args.reset)
    except SourceUnavailable as exc:
        raise SystemExit(f"Schema initialisation failed: {exc}") from exc
    finally:
        store.dispose()

    print("✅ Database schema applied")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
