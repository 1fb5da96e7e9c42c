"""Ledger (wallet) for a single corporate agent.

The ledger has no identity of its own: it is keyed by its owner's id.
"""

from __future__ import annotations

import threading
from decimal import Decimal
from typing import Any
from uuid import UUID

from market.domain.identity import require_id, to_decimal
from market.errors import InvalidArgument


class Ledger:
    """Non-negative balance held by one agent.

    Supports:
    - Credit (unbounded)
    - Debit, declined without mutation when funds are insufficient

    Each ledger serialises its own check-then-mutate sequences, so two racing
    debits can never both succeed when funds only cover one of them.
    """

    def __init__(self, owner_id: Any, balance: Any = Decimal("0")) -> None:
        """Initialize a ledger.

        Args:
            owner_id: Id of the owning agent (must not be nil)
            balance: Starting balance (must be >= 0)

        Raises:
            InvalidArgument: If owner_id is nil or balance < 0
        """
        owner = require_id(owner_id, what="Ledger owner id")
        amount = to_decimal(balance, what="Initial balance")
        if amount < 0:
            raise InvalidArgument("Initial balance cannot be negative")

        self._owner_id = owner
        self._balance = amount
        self._lock = threading.Lock()

    @classmethod
    def create(cls, owner_id: Any, initial_balance: Any) -> Ledger:
        """Create a ledger for ``owner_id`` funded with ``initial_balance``."""
        return cls(owner_id, initial_balance)

    @property
    def owner_id(self) -> UUID:
        return self._owner_id

    @property
    def balance(self) -> Decimal:
        with self._lock:
            return self._balance

    def credit(self, amount: Any) -> Decimal:
        """Add funds.

        Args:
            amount: Amount to add (must be > 0)

        Returns:
            Balance after the credit

        Raises:
            InvalidArgument: If amount <= 0
        """
        value = to_decimal(amount, what="Credit amount")
        if value <= 0:
            raise InvalidArgument("Credit amount must be positive")

        with self._lock:
            self._balance += value
            return self._balance

    def debit(self, amount: Any) -> bool:
        """Remove funds if the balance covers them.

        Args:
            amount: Amount to remove (must be > 0)

        Returns:
            True if debited, False if declined for insufficient funds

        Raises:
            InvalidArgument: If amount <= 0
        """
        value = to_decimal(amount, what="Debit amount")
        if value <= 0:
            raise InvalidArgument("Debit amount must be positive")

        with self._lock:
            if self._balance < value:
                return False
            self._balance -= value
            return True

    def __repr__(self) -> str:
        return f"<Ledger(owner_id={self._owner_id}, balance={self._balance})>"
