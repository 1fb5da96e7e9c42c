from __future__ import annotations

from typing import Optional, Protocol, Sequence
from uuid import UUID

from market.domain import Agent, Ledger, Sector, StockRecord
from market.types import SectorDescriptor


class MarketStore(Protocol):
    """Unit-of-work over sectors, agents, ledgers and stock records.

    Writes are staged until ``commit``; reads only ever see committed state.
    """

    def add_sector(self, sector: Sector) -> None:
        """Stage a new sector."""

    def add_agent(self, agent: Agent) -> None:
        """Stage a new agent."""

    def add_ledger(self, ledger: Ledger) -> None:
        """Stage a ledger (insert, or replace the committed balance for its owner)."""

    def add_stock_record(self, record: StockRecord) -> None:
        """Stage a stock record (insert, or replace the committed quantity for its id)."""

    def commit(self) -> None:
        """Make all staged writes visible at once. Raises SourceUnavailable on failure."""

    def rollback(self) -> None:
        """Discard all staged writes."""

    def query_all_sectors(self) -> Sequence[Sector]:
        """Fetch every committed sector."""

    def get_sector(self, *, sector_id: UUID) -> Optional[Sector]:
        """Fetch a single sector by id."""

    def get_agent(self, *, agent_id: UUID) -> Optional[Agent]:
        """Fetch a single agent by id, with its ledger and stock references resolved."""

    def list_agents(self) -> Sequence[Agent]:
        """Fetch all committed agents in creation order."""

    def get_ledger(self, *, owner_id: UUID) -> Optional[Ledger]:
        """Fetch the ledger owned by an agent."""

    def list_stock_records(self, *, owner_id: UUID) -> Sequence[StockRecord]:
        """Fetch the stock records owned by an agent, in insertion order."""


class SectorSource(Protocol):
    def load_sector_descriptors(self) -> Sequence[SectorDescriptor]:
        """Load sector descriptors. Raises SourceUnavailable if the backing resource cannot be read."""
