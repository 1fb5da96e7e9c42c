"""Console report of the assembled market (read-only)."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from market.domain import Agent, Ledger, Sector
from market.persistence.interfaces import MarketStore


def format_balance(balance: Decimal) -> str:
    return f"{balance:,.2f}"


def format_agent_line(agent: Agent, sector: Optional[Sector], ledger: Optional[Ledger]) -> str:
    sector_name = sector.name if sector is not None else "N/A"
    cash = format_balance(ledger.balance) if ledger is not None else "0.00"
    return f"CORP: {agent.display_name} | SECTOR: {sector_name} | BALANCE: ${cash}"


def render_market_report(store: MarketStore) -> list[str]:
    """One line per committed agent, in creation order."""
    lines: list[str] = []
    for agent in store.list_agents():
        sector = store.get_sector(sector_id=agent.sector_id)
        ledger = store.get_ledger(owner_id=agent.id)
        lines.append(format_agent_line(agent, sector, ledger))
    return lines
