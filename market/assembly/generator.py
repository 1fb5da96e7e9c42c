"""Random market generator.

Produces agent blueprints with a tier-dependent starting balance and a small
random basket of holdings.
"""

from __future__ import annotations

import random
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator, Mapping, Optional, Sequence

from market.errors import InvalidArgument
from market.types import AgentBlueprint, Holding, Tier

COMPANY_NAMES: tuple[str, ...] = ("Apex", "Quantum", "Global", "Vanguard", "Horizon", "Titan")
SUFFIXES: tuple[str, ...] = ("Holdings", "Partners", "Capital", "Networks", "Systems")
TIERS: tuple[Tier, ...] = ("S", "A", "B", "C")
ASSETS: tuple[str, ...] = ("CRUDE_OIL", "GOLD_BULLION", "RARE_EARTH", "GRAIN", "SILICON")

TIER_BALANCE_RANGES: Mapping[str, tuple[Decimal, Decimal]] = {
    "S": (Decimal("800000000"), Decimal("1500000000")),
    "A": (Decimal("200000000"), Decimal("800000000")),
    "B": (Decimal("50000000"), Decimal("200000000")),
    "C": (Decimal("10000000"), Decimal("50000000")),
}

MIN_HOLDINGS = 2
MAX_HOLDINGS = 4
MIN_QUANTITY = 100_000
MAX_QUANTITY = 4_999_999

_CENTS = Decimal("0.01")


class MarketGenerator:
    """Random blueprint factory (seed the RNG for reproducible markets)."""

    def __init__(
        self,
        *,
        rng: Optional[random.Random] = None,
        names: Sequence[str] = COMPANY_NAMES,
        suffixes: Sequence[str] = SUFFIXES,
        assets: Sequence[str] = ASSETS,
        bonus_credit: Optional[Decimal] = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._names = tuple(names)
        self._suffixes = tuple(suffixes)
        self._assets = tuple(assets)
        self._bonus_credit = bonus_credit

    def initial_balance(self, tier: Tier) -> Decimal:
        """Uniform draw within the tier's range, rounded to cents."""
        low, high = TIER_BALANCE_RANGES[tier]
        span = high - low
        value = low + span * Decimal(str(self._rng.random()))
        return value.quantize(_CENTS, rounding=ROUND_HALF_UP)

    def holdings(self) -> tuple[Holding, ...]:
        count = self._rng.randint(MIN_HOLDINGS, MAX_HOLDINGS)
        return tuple(
            Holding(
                symbol=self._rng.choice(self._assets),
                quantity=self._rng.randint(MIN_QUANTITY, MAX_QUANTITY),
            )
            for _ in range(count)
        )

    def blueprint(self) -> AgentBlueprint:
        tier = self._rng.choice(TIERS)
        return AgentBlueprint(
            name=self._rng.choice(self._names),
            suffix=self._rng.choice(self._suffixes),
            initial_balance=self.initial_balance(tier),
            holdings=self.holdings(),
            bonus_credit=self._bonus_credit,
            tier=tier,
        )

    def blueprints(self, count: int) -> Iterator[AgentBlueprint]:
        if count < 0:
            raise InvalidArgument("count must be >= 0")
        for _ in range(count):
            yield self.blueprint()
