from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_DATABASE_URL = "sqlite:///trading_engine.db"


@dataclass(frozen=True)
class StoreConfig:
    """Connection configuration.

    `database_url` should come from environment (MARKET_DATABASE_URL).
    Do not log it.
    """

    database_url: str = DEFAULT_DATABASE_URL
    echo: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> StoreConfig:
        env = os.environ if environ is None else environ
        return cls(
            database_url=env.get("MARKET_DATABASE_URL", DEFAULT_DATABASE_URL),
            echo=env.get("MARKET_SQL_ECHO", "").lower() in ("1", "true", "yes"),
        )
