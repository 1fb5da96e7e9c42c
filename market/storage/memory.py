"""In-memory implementation of the market store.

Rows are kept as plain tuples and rehydrated into fresh entities on every read,
so mutating an entity never changes committed state until it is re-added and
committed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from threading import Lock
from typing import Optional, Sequence, Union
from uuid import UUID

from market.domain import Agent, Ledger, Sector, StockRecord
from market.errors import PreconditionFailed
from market.persistence.interfaces import MarketStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _AgentRow:
    id: UUID
    name: str
    suffix: str
    created_at: datetime
    sector_id: UUID
    tier: Optional[str] = None


@dataclass(frozen=True)
class _StockRow:
    id: UUID
    owner_id: UUID
    asset_symbol: str
    quantity: int


_Staged = Union[Sector, _AgentRow, tuple[UUID, Decimal], _StockRow]


class InMemoryMarketStore(MarketStore):
    def __init__(self) -> None:
        self._lock = Lock()
        self._sectors: dict[UUID, Sector] = {}
        self._agents: dict[UUID, _AgentRow] = {}
        self._ledgers: dict[UUID, Decimal] = {}
        self._stock: dict[UUID, _StockRow] = {}
        self._staged: list[_Staged] = []

    def add_sector(self, sector: Sector) -> None:
        with self._lock:
            self._staged.append(sector)

    def add_agent(self, agent: Agent) -> None:
        row = _AgentRow(
            id=agent.id,
            name=agent.name,
            suffix=agent.suffix,
            created_at=agent.created_at,
            sector_id=agent.sector_id,
            tier=agent.tier,
        )
        with self._lock:
            self._staged.append(row)

    def add_ledger(self, ledger: Ledger) -> None:
        with self._lock:
            self._staged.append((ledger.owner_id, ledger.balance))

    def add_stock_record(self, record: StockRecord) -> None:
        row = _StockRow(
            id=record.id,
            owner_id=record.owner_id,
            asset_symbol=record.asset_symbol,
            quantity=record.quantity,
        )
        with self._lock:
            self._staged.append(row)

    def commit(self) -> None:
        with self._lock:
            staged, self._staged = self._staged, []
            sectors = dict(self._sectors)
            agents = dict(self._agents)
            ledgers = dict(self._ledgers)
            stock = dict(self._stock)

            for item in staged:
                if isinstance(item, Sector):
                    if item.id in sectors or any(s.name == item.name for s in sectors.values()):
                        raise PreconditionFailed(f"Sector {item.name!r} is already registered")
                    sectors[item.id] = item
                elif isinstance(item, _AgentRow):
                    if item.sector_id not in sectors:
                        raise PreconditionFailed(f"Agent {item.id} references unknown sector {item.sector_id}")
                    if item.id in agents:
                        raise PreconditionFailed(f"Agent {item.id} already exists")
                    agents[item.id] = item
                elif isinstance(item, _StockRow):
                    if item.owner_id not in agents:
                        raise PreconditionFailed(f"Stock record {item.id} references unknown agent {item.owner_id}")
                    stock[item.id] = item
                else:
                    owner_id, balance = item
                    if owner_id not in agents:
                        raise PreconditionFailed(f"Ledger references unknown agent {owner_id}")
                    ledgers[owner_id] = balance

            self._sectors = sectors
            self._agents = agents
            self._ledgers = ledgers
            self._stock = stock

        logger.debug("Committed %d staged writes", len(staged))

    def rollback(self) -> None:
        with self._lock:
            dropped = len(self._staged)
            self._staged = []
        if dropped:
            logger.debug("Rolled back %d staged writes", dropped)

    def query_all_sectors(self) -> Sequence[Sector]:
        with self._lock:
            return list(self._sectors.values())

    def get_sector(self, *, sector_id: UUID) -> Optional[Sector]:
        with self._lock:
            return self._sectors.get(sector_id)

    def get_agent(self, *, agent_id: UUID) -> Optional[Agent]:
        with self._lock:
            row = self._agents.get(agent_id)
            return self._hydrate_agent(row) if row is not None else None

    def list_agents(self) -> Sequence[Agent]:
        with self._lock:
            rows = sorted(self._agents.values(), key=lambda r: r.created_at)
            return [self._hydrate_agent(row) for row in rows]

    def get_ledger(self, *, owner_id: UUID) -> Optional[Ledger]:
        with self._lock:
            balance = self._ledgers.get(owner_id)
        return Ledger(owner_id, balance) if balance is not None else None

    def list_stock_records(self, *, owner_id: UUID) -> Sequence[StockRecord]:
        with self._lock:
            rows = [row for row in self._stock.values() if row.owner_id == owner_id]
        return [_to_stock_record(row) for row in rows]

    def _hydrate_agent(self, row: _AgentRow) -> Agent:
        # Caller holds the lock.
        agent = Agent(
            row.name,
            row.suffix,
            row.sector_id,
            agent_id=row.id,
            created_at=row.created_at,
            tier=row.tier,
        )
        balance = self._ledgers.get(row.id)
        if balance is not None:
            agent.attach_ledger(Ledger(row.id, balance))
        for stock_row in self._stock.values():
            if stock_row.owner_id == row.id:
                agent.receive_stock(_to_stock_record(stock_row))
        return agent


def _to_stock_record(row: _StockRow) -> StockRecord:
    return StockRecord(row.owner_id, row.asset_symbol, row.quantity, record_id=row.id)
