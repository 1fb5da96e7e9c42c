"""Behaviour shared by every MarketStore backend.

Each test runs against the in-memory store and the SQLite-backed
SQLAlchemy store through the parametrized ``store`` fixture.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from market.domain import Agent, AgentState, Ledger, Sector, StockRecord
from market.errors import PreconditionFailed
from market.persistence import MarketStore


@pytest.fixture
def sector(store: MarketStore) -> Sector:
    sector = Sector(name="Tech", category="Technology", valuation_grade=1.5)
    store.add_sector(sector)
    store.commit()
    return sector


@pytest.fixture
def agent(store: MarketStore, sector: Sector) -> Agent:
    agent = Agent("Acme", "Inc", sector.id)
    store.add_agent(agent)
    store.commit()
    return agent


class TestStagingAndCommit:
    """Staged writes only become visible on commit."""

    def test_staged_sector_invisible_until_commit(self, store: MarketStore) -> None:
        sector = Sector(name="Oil", category="Energy")
        store.add_sector(sector)
        assert store.query_all_sectors() == []
        assert store.get_sector(sector_id=sector.id) is None

        store.commit()
        assert store.get_sector(sector_id=sector.id) == sector

    def test_rollback_discards_staged_writes(self, store: MarketStore) -> None:
        store.add_sector(Sector(name="Oil", category="Energy"))
        store.rollback()
        store.commit()
        assert store.query_all_sectors() == []

    def test_commit_with_nothing_staged_is_noop(self, store: MarketStore) -> None:
        store.commit()
        assert store.list_agents() == []

    def test_sector_round_trip(self, store: MarketStore, sector: Sector) -> None:
        loaded = store.get_sector(sector_id=sector.id)
        assert loaded is not None
        assert (loaded.id, loaded.name, loaded.category, loaded.valuation_grade) == (
            sector.id,
            "Tech",
            "Technology",
            1.5,
        )

    def test_duplicate_sector_name_rejected(self, store: MarketStore, sector: Sector) -> None:
        store.add_sector(Sector(name="Tech", category="Other"))
        with pytest.raises(PreconditionFailed):
            store.commit()
        assert len(store.query_all_sectors()) == 1


class TestReferentialIntegrity:
    """Writes that reference missing rows are rejected at commit."""

    def test_agent_with_unknown_sector_rejected(self, store: MarketStore) -> None:
        agent = Agent("Ghost", "Ltd", uuid4())
        store.add_agent(agent)
        with pytest.raises(PreconditionFailed):
            store.commit()
        assert store.get_agent(agent_id=agent.id) is None

    def test_ledger_for_unknown_agent_rejected(self, store: MarketStore) -> None:
        store.add_ledger(Ledger.create(uuid4(), 100))
        with pytest.raises(PreconditionFailed):
            store.commit()

    def test_stock_for_unknown_agent_rejected(self, store: MarketStore) -> None:
        store.add_stock_record(StockRecord.create(uuid4(), "GOLD", 5))
        with pytest.raises(PreconditionFailed):
            store.commit()

    def test_failed_batch_applies_nothing(self, store: MarketStore, sector: Sector) -> None:
        good = Agent("Acme", "Inc", sector.id)
        store.add_agent(good)
        store.add_agent(Agent("Ghost", "Ltd", uuid4()))
        with pytest.raises(PreconditionFailed):
            store.commit()
        assert store.get_agent(agent_id=good.id) is None

    def test_agent_and_sector_in_one_batch(self, store: MarketStore) -> None:
        sector = Sector(name="Grain", category="Agriculture")
        agent = Agent("Farm", "Co", sector.id)
        store.add_sector(sector)
        store.add_agent(agent)
        store.commit()
        assert store.get_agent(agent_id=agent.id) is not None


class TestLedgerPersistence:
    """Tests for ledger storage."""

    def test_missing_ledger_is_none(self, store: MarketStore, agent: Agent) -> None:
        assert store.get_ledger(owner_id=agent.id) is None

    def test_ledger_round_trip(self, store: MarketStore, agent: Agent) -> None:
        store.add_ledger(Ledger.create(agent.id, Decimal("1000.25")))
        store.commit()

        ledger = store.get_ledger(owner_id=agent.id)
        assert ledger is not None
        assert ledger.owner_id == agent.id
        assert ledger.balance == Decimal("1000.25")

    def test_add_ledger_upserts_balance(self, store: MarketStore, agent: Agent) -> None:
        ledger = Ledger.create(agent.id, 1000)
        store.add_ledger(ledger)
        store.commit()

        ledger.credit(500)
        store.add_ledger(ledger)
        store.commit()

        assert store.get_ledger(owner_id=agent.id).balance == Decimal("1500")

    def test_uncommitted_mutation_not_persisted(self, store: MarketStore, agent: Agent) -> None:
        ledger = Ledger.create(agent.id, 1000)
        store.add_ledger(ledger)
        store.commit()

        ledger.debit(400)
        assert store.get_ledger(owner_id=agent.id).balance == Decimal("1000")


class TestStockPersistence:
    """Tests for stock record storage."""

    def test_records_listed_in_insertion_order(self, store: MarketStore, agent: Agent) -> None:
        symbols = ["SILICON", "GOLD", "CRUDE_OIL"]
        for symbol in symbols:
            store.add_stock_record(StockRecord.create(agent.id, symbol, 10))
            store.commit()

        assert [r.asset_symbol for r in store.list_stock_records(owner_id=agent.id)] == symbols

    def test_add_stock_record_upserts_quantity(self, store: MarketStore, agent: Agent) -> None:
        record = StockRecord.create(agent.id, "GOLD", 10)
        store.add_stock_record(record)
        store.commit()

        record.remove_stock(4)
        store.add_stock_record(record)
        store.commit()

        [loaded] = store.list_stock_records(owner_id=agent.id)
        assert loaded.id == record.id
        assert loaded.quantity == 6

    def test_records_scoped_to_owner(self, store: MarketStore, sector: Sector, agent: Agent) -> None:
        other = Agent("Other", "LLC", sector.id)
        store.add_agent(other)
        store.add_stock_record(StockRecord.create(agent.id, "GOLD", 1))
        store.add_stock_record(StockRecord.create(other.id, "GRAIN", 2))
        store.commit()

        assert [r.asset_symbol for r in store.list_stock_records(owner_id=other.id)] == ["GRAIN"]


class TestAgentHydration:
    """Agents read back from a store carry their references."""

    def test_identified_agent(self, store: MarketStore, agent: Agent, sector: Sector) -> None:
        loaded = store.get_agent(agent_id=agent.id)
        assert loaded is not None
        assert loaded.display_name == "Acme Inc"
        assert loaded.sector_id == sector.id
        assert loaded.ledger_id is None
        assert loaded.stock_record_ids == ()
        assert loaded.created_at.tzinfo is not None
        assert loaded.created_at == agent.created_at

    def test_stocked_agent(self, store: MarketStore, agent: Agent) -> None:
        record = StockRecord.create(agent.id, "GOLD", 10)
        store.add_ledger(Ledger.create(agent.id, 50))
        store.add_stock_record(record)
        store.commit()

        loaded = store.get_agent(agent_id=agent.id)
        assert loaded.ledger_id == agent.id
        assert loaded.stock_record_ids == (record.id,)
        assert loaded.state is AgentState.STOCKED

    def test_list_agents_in_creation_order(self, store: MarketStore, sector: Sector) -> None:
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        later = Agent("Later", "Inc", sector.id, created_at=start + timedelta(hours=1))
        earlier = Agent("Earlier", "Inc", sector.id, created_at=start)
        store.add_agent(later)
        store.add_agent(earlier)
        store.commit()

        assert [a.name for a in store.list_agents()] == ["Earlier", "Later"]

    def test_equal_timestamps_keep_insertion_order(self, store: MarketStore, sector: Sector) -> None:
        created = datetime(2024, 1, 1, tzinfo=timezone.utc)
        names = ["Zeta", "Alpha", "Mid", "Beta"]
        for name in names:
            store.add_agent(Agent(name, "Inc", sector.id, created_at=created))
            store.commit()

        assert [a.name for a in store.list_agents()] == names

    def test_tier_round_trip(self, store: MarketStore, sector: Sector) -> None:
        tiered = Agent("Apex", "Capital", sector.id, tier="S")
        plain = Agent("Plain", "LLC", sector.id)
        store.add_agent(tiered)
        store.add_agent(plain)
        store.commit()

        assert store.get_agent(agent_id=tiered.id).tier == "S"
        assert store.get_agent(agent_id=plain.id).tier is None

    def test_reads_return_fresh_entities(self, store: MarketStore, agent: Agent) -> None:
        first = store.get_agent(agent_id=agent.id)
        second = store.get_agent(agent_id=agent.id)
        assert first is not second
