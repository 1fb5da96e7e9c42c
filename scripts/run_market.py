#!/usr/bin/env python3
"""Build a market end to end and print it.

Steps:
1. Reset (or create) the schema
2. Seed sectors from the JSON seed file
3. Onboard N agents: identity -> ledger -> holdings -> bonus credit
4. Print one line per agent with its sector and balance

Usage:
    python scripts/run_market.py --agents 10 --seed 42
    python scripts/run_market.py --initial-balance 1000000 --no-reset
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from dataclasses import replace
from decimal import Decimal, InvalidOperation
from pathlib import Path

# Add project root to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from market.assembly import AssemblyPipeline, MarketGenerator  # noqa: E402
from market.config import MarketConfig  # noqa: E402
from market.errors import MarketError  # noqa: E402
from market.reporting import render_market_report  # noqa: E402
from market.sectors import JsonSectorSource, SectorRegistry  # noqa: E402
from market.storage.sql import SqlAlchemyMarketStore  # noqa: E402

logger = logging.getLogger(__name__)


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"not a decimal amount: {value!r}") from exc


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Assemble a random market and print a report")
    parser.add_argument("--agents", type=int, help="Number of agents to onboard (default: 10)")
    parser.add_argument("--sectors", type=Path, help="Sector seed file (default: data/sectors.json)")
    parser.add_argument("--seed", type=int, help="RNG seed for reproducible markets")
    parser.add_argument(
        "--initial-balance",
        type=_decimal,
        help="Fixed starting balance for every agent (default: tier-based random)",
    )
    parser.add_argument("--no-reset", action="store_true", help="Keep existing tables and rows")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        config = MarketConfig.from_env().with_overrides(
            agent_count=args.agents,
            sectors_path=args.sectors,
            seed=args.seed,
            initial_balance=args.initial_balance,
        )
        if args.no_reset:
            config = replace(config, reset_schema=False)
    except MarketError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    rng = random.Random(config.seed)
    generator = MarketGenerator(rng=rng, bonus_credit=config.bonus_credit)
    blueprints = list(generator.blueprints(config.agent_count))
    if config.initial_balance is not None:
        blueprints = [replace(bp, initial_balance=config.initial_balance) for bp in blueprints]

    store = SqlAlchemyMarketStore(config=config.store)
    try:
        store.init_schema(reset=config.reset_schema)
        pipeline = AssemblyPipeline(
            store=store,
            source=JsonSectorSource(config.sectors_path),
            registry=SectorRegistry(store, rng=rng),
        )
        report = pipeline.run(blueprints)

        for line in render_market_report(store):
            print(line)
    except MarketError as exc:
        logger.error("Market assembly aborted: %s", exc)
        raise SystemExit(f"Market assembly aborted: {exc}") from exc
    finally:
        store.dispose()

    for failure in report.failures:
        print(f"FAILED: {failure.blueprint.name} {failure.blueprint.suffix} at {failure.step}: {failure.error}")

    return 0 if report.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
