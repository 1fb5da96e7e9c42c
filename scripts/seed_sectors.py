#!/usr/bin/env python3
"""Seed the sector registry from a JSON file.

The script is idempotent - sectors whose name is already registered are skipped.

Usage:
    export MARKET_DATABASE_URL="sqlite:///trading_engine.db"
    python scripts/seed_sectors.py --sectors data/sectors.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from market.config import DEFAULT_SECTORS_PATH  # noqa: E402
from market.errors import InvalidArgument, SourceUnavailable  # noqa: E402
from market.sectors import JsonSectorSource, SectorRegistry  # noqa: E402
from market.storage.sql import SqlAlchemyMarketStore, StoreConfig  # noqa: E402

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed sectors from a JSON descriptor file")
    parser.add_argument("--sectors", type=Path, default=DEFAULT_SECTORS_PATH, help="Path to the sector seed file")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    store = SqlAlchemyMarketStore(config=StoreConfig.from_env())
    try:
        store.init_schema()
        created = SectorRegistry(store).seed_from(JsonSectorSource(args.sectors))
    except (SourceUnavailable, InvalidArgument) as exc:
        raise SystemExit(f"Sector seeding failed: {exc}") from exc
    finally:
        store.dispose()

    for sector in created:
        print(f"  + {sector.name} ({sector.category}, grade {sector.valuation_grade:g})")
    print(f"✅ {len(created)} new sectors seeded")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
