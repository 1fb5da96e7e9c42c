"""Corporate agent aggregate root.

The agent holds identity references only: its sector id, its ledger id (the
agent's own id once funded) and the ids of its stock records. Resolving those
references is the store's job.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from market.domain.identity import new_id, require_id, require_text
from market.domain.ledger import Ledger
from market.domain.stock import StockRecord
from market.errors import InvalidArgument, PreconditionFailed

TIERS = ("S", "A", "B", "C")


class AgentState(str, Enum):
    """Onboarding stage of an agent."""

    UNBORN = "UNBORN"
    IDENTIFIED = "IDENTIFIED"
    FUNDED = "FUNDED"
    STOCKED = "STOCKED"


class Agent:
    """A market participant (corporation).

    Invariants:
    - always bound to exactly one sector
    - at most one ledger, keyed by the agent's id
    - each stock record referenced at most once, in insertion order
    """

    def __init__(
        self,
        name: Any,
        suffix: Any,
        sector_id: Any,
        *,
        agent_id: Any = None,
        created_at: Optional[datetime] = None,
        tier: Optional[str] = None,
    ) -> None:
        if tier is not None and tier not in TIERS:
            raise InvalidArgument(f"Agent tier must be one of {', '.join(TIERS)}, got {tier!r}")
        self._name = require_text(name, what="Agent name")
        self._suffix = require_text(suffix, what="Agent suffix")
        self._sector_id = require_id(sector_id, what="Agent sector id")
        self._id = new_id() if agent_id is None else require_id(agent_id, what="Agent id")
        self._created_at = created_at or datetime.now(timezone.utc)
        self._tier = tier
        self._ledger_id: Optional[UUID] = None
        self._stock_record_ids: list[UUID] = []

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def suffix(self) -> str:
        return self._suffix

    @property
    def display_name(self) -> str:
        return f"{self._name} {self._suffix}"

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def tier(self) -> Optional[str]:
        return self._tier

    @property
    def sector_id(self) -> UUID:
        return self._sector_id

    @property
    def ledger_id(self) -> Optional[UUID]:
        return self._ledger_id

    @property
    def stock_record_ids(self) -> tuple[UUID, ...]:
        return tuple(self._stock_record_ids)

    @property
    def state(self) -> AgentState:
        if self._ledger_id is None:
            return AgentState.IDENTIFIED
        if self._stock_record_ids:
            return AgentState.STOCKED
        return AgentState.FUNDED

    def attach_ledger(self, ledger: Ledger) -> None:
        """Bind the agent's ledger.

        Raises:
            InvalidArgument: If the ledger belongs to another agent
            PreconditionFailed: If a ledger is already attached
        """
        if ledger is None:
            raise InvalidArgument("Ledger is required")
        if ledger.owner_id != self._id:
            raise InvalidArgument(f"Ledger owner {ledger.owner_id} does not match agent {self._id}")
        if self._ledger_id is not None:
            raise PreconditionFailed(f"Agent {self._id} already has a ledger")
        self._ledger_id = ledger.owner_id

    def receive_stock(self, record: StockRecord) -> bool:
        """Reference a stock record; adding the same record twice is a no-op.

        Returns:
            True if the record was newly attached
        """
        if record is None:
            raise InvalidArgument("Stock record is required")
        if record.owner_id != self._id:
            raise InvalidArgument(f"Stock record owner {record.owner_id} does not match agent {self._id}")
        if record.id in self._stock_record_ids:
            return False
        self._stock_record_ids.append(record.id)
        return True

    def __repr__(self) -> str:
        return f"<Agent(id={self._id}, name={self._name!r}, sector_id={self._sector_id}, state={self.state.value})>"
