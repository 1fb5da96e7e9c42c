"""Value shapes shared across the market: seed descriptors, blueprints and trade records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Literal, Optional
from uuid import UUID, uuid4

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

Tier = Literal["S", "A", "B", "C"]


class SectorDescriptor(BaseModel):
    """One entry of the declarative sector seed.

    Accepts both snake_case keys and the PascalCase keys used by existing seed
    files (``Name``, ``PrimarySector``, ``BaseValuation``).
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1, validation_alias=AliasChoices("name", "Name"))
    category: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("category", "primary_sector", "PrimarySector", "Category"),
    )
    base_valuation: float = Field(
        0.0,
        validation_alias=AliasChoices("base_valuation", "BaseValuation", "valuation_grade"),
    )


@dataclass(frozen=True)
class Holding:
    symbol: str
    quantity: int


@dataclass(frozen=True)
class AgentBlueprint:
    """Everything needed to onboard one agent."""

    name: str
    suffix: str
    initial_balance: Decimal
    holdings: tuple[Holding, ...] = ()
    bonus_credit: Optional[Decimal] = None
    tier: Optional[Tier] = None


@dataclass(frozen=True)
class TradeHistory:
    """Completed trade between two agents (record shape only)."""

    buyer_id: UUID
    seller_id: UUID
    asset_symbol: str
    price: Decimal
    quantity: int
    executed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: UUID = field(default_factory=uuid4)
