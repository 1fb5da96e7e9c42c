"""Identity and value coercion helpers shared by the domain entities."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import UUID, uuid4

from market.errors import InvalidArgument

NIL_ID = UUID(int=0)


def new_id() -> UUID:
    return uuid4()


def require_id(value: Any, *, what: str) -> UUID:
    """Return ``value`` as a UUID, rejecting None, the nil UUID and garbage."""
    if value is None:
        raise InvalidArgument(f"{what} is required")
    if isinstance(value, UUID):
        ident = value
    else:
        try:
            ident = UUID(str(value))
        except ValueError as exc:
            raise InvalidArgument(f"{what} is not a valid identifier: {value!r}") from exc
    if ident == NIL_ID:
        raise InvalidArgument(f"{what} cannot be the nil identifier")
    return ident


def require_text(value: Any, *, what: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(f"{what} cannot be empty")
    return value


def to_decimal(value: Any, *, what: str) -> Decimal:
    """Coerce ints, strings, floats and Decimals to a finite Decimal.

    Floats go through ``str()`` so ``0.1`` stays ``Decimal("0.1")``.
    """
    if isinstance(value, bool):
        raise InvalidArgument(f"{what} must be numeric, got bool")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value))
        except InvalidOperation as exc:
            raise InvalidArgument(f"{what} must be numeric, got {value!r}") from exc
    else:
        raise InvalidArgument(f"{what} must be numeric, got {type(value).__name__}")
    if not amount.is_finite():
        raise InvalidArgument(f"{what} must be finite, got {amount}")
    return amount


def to_quantity(value: Any, *, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{what} must be an integer, got {value!r}")
    return value
