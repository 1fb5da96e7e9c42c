"""SQLAlchemy models for the market tables.

Tables:
- sectors
- agents
- ledgers (keyed by owning agent)
- stock_records
- trade_history (record shape only; nothing writes it yet)
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, Numeric, Text, TypeDecorator, Uuid
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import DeclarativeBase


class Money(TypeDecorator):
    """Exact, unbounded decimal column.

    PostgreSQL gets an unconstrained NUMERIC (arbitrary precision). Other
    dialects, SQLite included, store the decimal's text form so no digit is
    rounded away and there is no upper bound.
    """

    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect: Dialect) -> Any:
        if dialect.name == "postgresql":
            return dialect.type_descriptor(Numeric(asdecimal=True))
        return dialect.type_descriptor(Text())

    def process_bind_param(self, value: Optional[Decimal], dialect: Dialect) -> Any:
        if value is None:
            return None
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
        return amount if dialect.name == "postgresql" else str(amount)

    def process_result_value(self, value: Any, dialect: Dialect) -> Optional[Decimal]:
        if value is None:
            return None
        return value if isinstance(value, Decimal) else Decimal(str(value))


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class SectorRow(Base):
    """Industry vertical.

    Table: sectors
    """

    __tablename__ = "sectors"

    id = Column(Uuid, primary_key=True)
    name = Column(Text, nullable=False, unique=True)
    category = Column(Text, nullable=False)  # broader grouping, e.g. "Technology"
    valuation_grade = Column(Float, nullable=False, default=0.0)

    def __repr__(self) -> str:
        return f"<SectorRow(id={self.id}, name={self.name}, category={self.category})>"


class AgentRow(Base):
    """Corporate agent.

    Table: agents
    """

    __tablename__ = "agents"

    id = Column(Uuid, primary_key=True)
    name = Column(Text, nullable=False)
    suffix = Column(Text, nullable=False)
    seq = Column(Integer, nullable=False)  # insertion order, breaks created_at ties
    created_at = Column(DateTime(timezone=True), nullable=False)
    sector_id = Column(Uuid, ForeignKey("sectors.id"), nullable=False)
    tier = Column(Text, nullable=True)  # S, A, B or C when generated

    __table_args__ = (Index("idx_agents_sector", "sector_id"),)

    def __repr__(self) -> str:
        return f"<AgentRow(id={self.id}, name={self.name}, sector_id={self.sector_id})>"


class LedgerRow(Base):
    """Agent balance; the owner id is both primary and foreign key.

    Table: ledgers
    """

    __tablename__ = "ledgers"

    owner_id = Column(Uuid, ForeignKey("agents.id"), primary_key=True)
    balance = Column(Money, nullable=False)

    def __repr__(self) -> str:
        return f"<LedgerRow(owner_id={self.owner_id}, balance={self.balance})>"


class StockRecordRow(Base):
    """Quantity of one asset held by one agent.

    Table: stock_records
    """

    __tablename__ = "stock_records"

    id = Column(Uuid, primary_key=True)
    seq = Column(Integer, primary_key=False, nullable=False)  # insertion order per store
    owner_id = Column(Uuid, ForeignKey("agents.id"), nullable=False)
    asset_symbol = Column(Text, nullable=False)
    quantity = Column(Integer, nullable=False)

    __table_args__ = (Index("idx_stock_records_owner", "owner_id", "seq"),)

    def __repr__(self) -> str:
        return f"<StockRecordRow(id={self.id}, owner_id={self.owner_id}, {self.asset_symbol}={self.quantity})>"


class TradeHistoryRow(Base):
    """Completed trade between two agents.

    Table: trade_history
    """

    __tablename__ = "trade_history"

    id = Column(Uuid, primary_key=True)
    buyer_id = Column(Uuid, ForeignKey("agents.id"), nullable=False)
    seller_id = Column(Uuid, ForeignKey("agents.id"), nullable=False)
    asset_symbol = Column(Text, nullable=False)
    price = Column(Money, nullable=False)
    quantity = Column(Integer, nullable=False)
    executed_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (Index("idx_trade_history_symbol_time", "asset_symbol", "executed_at"),)
