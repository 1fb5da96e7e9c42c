"""Economic sector referenced by corporate agents."""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from market.domain.identity import new_id, require_id, require_text
from market.errors import InvalidArgument


@dataclass(frozen=True)
class Sector:
    """An industry vertical with a valuation coefficient.

    Immutable once created; owned by the sector registry and referenced by id
    from agents.
    """

    name: str
    category: str
    valuation_grade: float = 0.0
    id: UUID = field(default_factory=new_id)

    def __post_init__(self) -> None:
        require_text(self.name, what="Sector name")
        require_text(self.category, what="Sector category")
        if isinstance(self.valuation_grade, bool) or not isinstance(self.valuation_grade, (int, float)):
            raise InvalidArgument(f"Valuation grade must be a number, got {self.valuation_grade!r}")
        object.__setattr__(self, "valuation_grade", float(self.valuation_grade))
        object.__setattr__(self, "id", require_id(self.id, what="Sector id"))
