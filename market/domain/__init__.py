"""Market domain entities.

Sectors, agents, ledgers and stock records with their invariants.
"""

from .agent import Agent, AgentState
from .identity import NIL_ID
from .ledger import Ledger
from .sector import Sector
from .stock import StockRecord

__all__ = [
    "Agent",
    "AgentState",
    "Ledger",
    "NIL_ID",
    "Sector",
    "StockRecord",
]
