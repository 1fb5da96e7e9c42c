"""SQLAlchemy models for the market database."""

from db.models.market import AgentRow, Base, LedgerRow, SectorRow, StockRecordRow, TradeHistoryRow

__all__ = ["AgentRow", "Base", "LedgerRow", "SectorRow", "StockRecordRow", "TradeHistoryRow"]
