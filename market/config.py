"""Runtime configuration for the market pipeline.

Values come from environment variables; CLI flags override them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from decimal import Decimal
from pathlib import Path
from typing import Mapping, Optional

from market.domain.identity import to_decimal
from market.errors import InvalidArgument
from market.storage.sql.config import StoreConfig

_REPO_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_SECTORS_PATH = _REPO_ROOT / "data" / "sectors.json"


@dataclass(frozen=True)
class MarketConfig:
    """Market pipeline configuration."""

    store: StoreConfig = field(default_factory=StoreConfig)
    sectors_path: Path = DEFAULT_SECTORS_PATH
    agent_count: int = 10
    initial_balance: Optional[Decimal] = None  # None: tier-based random balance
    bonus_credit: Optional[Decimal] = Decimal("50000")
    seed: Optional[int] = None
    reset_schema: bool = True

    def __post_init__(self) -> None:
        if self.agent_count < 0:
            raise InvalidArgument("agent_count must be >= 0")
        if self.initial_balance is not None and self.initial_balance < 0:
            raise InvalidArgument("initial_balance cannot be negative")
        if self.bonus_credit is not None and self.bonus_credit <= 0:
            raise InvalidArgument("bonus_credit must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> MarketConfig:
        env = os.environ if environ is None else environ

        def _opt_decimal(key: str, default: Optional[Decimal]) -> Optional[Decimal]:
            raw = env.get(key)
            if raw is None:
                return default
            if raw.strip().lower() in ("", "none"):
                return None
            return to_decimal(raw, what=key)

        def _opt_int(key: str, default: Optional[int]) -> Optional[int]:
            raw = env.get(key)
            if raw is None or not raw.strip():
                return default
            try:
                return int(raw)
            except ValueError as exc:
                raise InvalidArgument(f"{key} must be an integer, got {raw!r}") from exc

        store = StoreConfig.from_env(env)
        return cls(
            store=store,
            sectors_path=Path(env.get("MARKET_SECTORS_PATH", str(DEFAULT_SECTORS_PATH))),
            agent_count=_opt_int("MARKET_AGENT_COUNT", 10) or 0,
            initial_balance=_opt_decimal("MARKET_INITIAL_BALANCE", None),
            bonus_credit=_opt_decimal("MARKET_BONUS_CREDIT", Decimal("50000")),
            seed=_opt_int("MARKET_SEED", None),
            reset_schema=env.get("MARKET_RESET_SCHEMA", "true").lower() in ("1", "true", "yes"),
        )

    def with_overrides(self, **changes: object) -> MarketConfig:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
