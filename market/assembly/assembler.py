"""Agent assembly line.

Each step persists its own unit of work: the entity is staged and committed
together, and a failed commit is rolled back before the error propagates.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union
from uuid import UUID

from market.domain import Agent, Ledger, StockRecord
from market.domain.identity import require_id
from market.errors import PreconditionFailed
from market.persistence.interfaces import MarketStore
from market.sectors import SectorRegistry

logger = logging.getLogger(__name__)


class AgentAssembler:
    """Builds agents, funds them and hands out their stock.

    Onboarding order per agent: ``build_identity`` -> ``fund_agent`` ->
    zero or more ``stock_agent``. Later adjustments are ordinary ledger or
    stock record operations persisted with ``save_ledger`` / ``save_stock_record``.
    """

    def __init__(self, store: MarketStore, registry: SectorRegistry) -> None:
        self._store = store
        self._registry = registry

    def build_identity(self, name: str, suffix: str, *, tier: Optional[str] = None) -> Agent:
        """Create and persist an agent bound to a randomly selected sector.

        Raises:
            PreconditionFailed: If no sector is registered
            InvalidArgument: If name or suffix is empty, or the tier unknown
        """
        sector = self._registry.select_sector()
        agent = Agent(name, suffix, sector.id, tier=tier)

        self._store.add_agent(agent)
        self._commit()

        logger.info("Built agent %s (%s) in sector %s", agent.display_name, agent.id, sector.name)
        return agent

    def fund_agent(self, agent: Union[Agent, Any], initial_balance: Any) -> Ledger:
        """Create, persist and attach the agent's ledger.

        ``agent`` is an Agent or an agent id. A passed Agent gets the ledger
        attached once it is committed.

        Raises:
            InvalidArgument: If the id is nil or the balance negative
            PreconditionFailed: If the agent does not exist or is already funded
        """
        stored = self._require_agent(_agent_id(agent))
        if stored.ledger_id is not None or (isinstance(agent, Agent) and agent.ledger_id is not None):
            raise PreconditionFailed(f"Agent {stored.id} is already funded")

        ledger = Ledger.create(stored.id, initial_balance)
        self._store.add_ledger(ledger)
        self._commit()
        if isinstance(agent, Agent):
            agent.attach_ledger(ledger)

        logger.info("Funded agent %s with %s", stored.id, ledger.balance)
        return ledger

    def stock_agent(self, agent: Union[Agent, Any], symbol: Any, quantity: Any) -> StockRecord:
        """Create, persist and attach a stock record for the agent.

        ``agent`` is an Agent or an agent id, as for ``fund_agent``.

        Raises:
            InvalidArgument: If the symbol is empty or the quantity negative
            PreconditionFailed: If the agent does not exist
        """
        stored = self._require_agent(_agent_id(agent))

        record = StockRecord.create(stored.id, symbol, quantity)
        self._store.add_stock_record(record)
        self._commit()
        if isinstance(agent, Agent):
            agent.receive_stock(record)

        logger.info("Stocked agent %s with %d %s", stored.id, record.quantity, record.asset_symbol)
        return record

    def save_ledger(self, ledger: Ledger) -> None:
        """Persist a ledger after credit/debit adjustments."""
        self._require_agent(ledger.owner_id)
        self._store.add_ledger(ledger)
        self._commit()

    def save_stock_record(self, record: StockRecord) -> None:
        """Persist a stock record after add/remove adjustments."""
        self._require_agent(record.owner_id)
        self._store.add_stock_record(record)
        self._commit()

    def _require_agent(self, agent_id: Any) -> Agent:
        ident: UUID = require_id(agent_id, what="Agent id")
        agent = self._store.get_agent(agent_id=ident)
        if agent is None:
            raise PreconditionFailed(f"Agent {ident} does not exist")
        return agent

    def _commit(self) -> None:
        try:
            self._store.commit()
        except Exception:
            self._store.rollback()
            raise


def _agent_id(agent: Union[Agent, Any]) -> Any:
    return agent.id if isinstance(agent, Agent) else agent
