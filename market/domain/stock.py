"""Stock record: quantity of one asset symbol held by one agent."""

from __future__ import annotations

import threading
from typing import Any
from uuid import UUID

from market.domain.identity import new_id, require_id, require_text, to_quantity
from market.errors import InvalidArgument


class StockRecord:
    """Non-negative integer holding of a single asset symbol.

    Mirrors :class:`~market.domain.ledger.Ledger` with whole units instead of
    a decimal balance. Symbols are case-sensitive tickers.
    """

    def __init__(
        self,
        owner_id: Any,
        asset_symbol: Any,
        quantity: Any = 0,
        *,
        record_id: Any = None,
    ) -> None:
        owner = require_id(owner_id, what="Stock record owner id")
        symbol = require_text(asset_symbol, what="Asset symbol")
        qty = to_quantity(quantity, what="Initial quantity")
        if qty < 0:
            raise InvalidArgument("Initial quantity cannot be negative")

        self._id = new_id() if record_id is None else require_id(record_id, what="Stock record id")
        self._owner_id = owner
        self._asset_symbol = symbol
        self._quantity = qty
        self._lock = threading.Lock()

    @classmethod
    def create(cls, owner_id: Any, symbol: Any, quantity: Any) -> StockRecord:
        """Create a stock record with a freshly generated id."""
        return cls(owner_id, symbol, quantity)

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def owner_id(self) -> UUID:
        return self._owner_id

    @property
    def asset_symbol(self) -> str:
        return self._asset_symbol

    @property
    def quantity(self) -> int:
        with self._lock:
            return self._quantity

    def add_stock(self, amount: Any) -> int:
        """Increase the quantity.

        Returns:
            Quantity after the addition

        Raises:
            InvalidArgument: If amount <= 0
        """
        value = to_quantity(amount, what="Amount")
        if value <= 0:
            raise InvalidArgument("Amount must be positive")

        with self._lock:
            self._quantity += value
            return self._quantity

    def remove_stock(self, amount: Any) -> bool:
        """Decrease the quantity if enough units are held.

        Returns:
            True if removed, False if declined for insufficient stock

        Raises:
            InvalidArgument: If amount <= 0
        """
        value = to_quantity(amount, what="Amount")
        if value <= 0:
            raise InvalidArgument("Amount must be positive")

        with self._lock:
            if self._quantity < value:
                return False
            self._quantity -= value
            return True

    def __repr__(self) -> str:
        return (
            f"<StockRecord(id={self._id}, owner_id={self._owner_id}, "
            f"symbol={self._asset_symbol}, qty={self._quantity})>"
        )
