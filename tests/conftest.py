"""Shared test fixtures for pytest.

Provides stores (in-memory and SQLite-backed), sector descriptors and seeded
registries used across multiple test files.
"""

import json
import random
from pathlib import Path
from typing import Iterator

import pytest

from market.persistence import MarketStore
from market.sectors import SectorRegistry
from market.storage import InMemoryMarketStore, SqlAlchemyMarketStore, StoreConfig
from market.types import SectorDescriptor


@pytest.fixture
def memory_store() -> InMemoryMarketStore:
    return InMemoryMarketStore()


@pytest.fixture
def sql_store() -> Iterator[SqlAlchemyMarketStore]:
    """SQLAlchemy store on a private in-memory SQLite database."""
    store = SqlAlchemyMarketStore(config=StoreConfig(database_url="sqlite://"))
    store.init_schema()
    yield store
    store.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request: pytest.FixtureRequest) -> MarketStore:
    """Run the test once per store backend."""
    if request.param == "memory":
        return request.getfixturevalue("memory_store")
    return request.getfixturevalue("sql_store")


@pytest.fixture
def tech_descriptor() -> SectorDescriptor:
    return SectorDescriptor(name="Tech", category="Technology", base_valuation=1.5)


@pytest.fixture
def sector_descriptors() -> list[SectorDescriptor]:
    """Three sectors across two categories."""
    return [
        SectorDescriptor(name="Semiconductors", category="Technology", base_valuation=1.85),
        SectorDescriptor(name="Renewable Power", category="Energy", base_valuation=1.2),
        SectorDescriptor(name="Agribusiness", category="Consumer Staples", base_valuation=0.8),
    ]


@pytest.fixture
def registry(store: MarketStore) -> SectorRegistry:
    return SectorRegistry(store, rng=random.Random(7))


@pytest.fixture
def seeded_registry(registry: SectorRegistry, tech_descriptor: SectorDescriptor) -> SectorRegistry:
    registry.seed([tech_descriptor])
    return registry


@pytest.fixture
def sectors_file(tmp_path: Path) -> Path:
    """Seed file using the PascalCase keys of existing seed files."""
    path = tmp_path / "sectors.json"
    path.write_text(
        json.dumps(
            [
                {"PrimarySector": "Technology", "Name": "Tech", "BaseValuation": 1.5},
                {"PrimarySector": "Energy", "Name": "Oil", "BaseValuation": 0.9},
            ]
        ),
        encoding="utf-8",
    )
    return path
