"""Sector registry: idempotent bootstrap and random selection."""

from __future__ import annotations

import logging
import random
from typing import Iterable, Optional, Sequence
from uuid import UUID

from market.domain import Sector
from market.errors import PreconditionFailed
from market.persistence.interfaces import MarketStore, SectorSource
from market.types import SectorDescriptor

logger = logging.getLogger(__name__)


class SectorRegistry:
    """Catalog of sectors backed by a market store.

    The store is the source of truth; the registry never caches, so every
    selection draws from the currently committed snapshot.
    """

    def __init__(self, store: MarketStore, *, rng: Optional[random.Random] = None) -> None:
        self._store = store
        self._rng = rng or random.Random()

    def seed(self, descriptors: Iterable[SectorDescriptor]) -> list[Sector]:
        """Register one sector per unseen name.

        Names already registered, or repeated earlier in the same batch, are
        skipped. All new sectors are committed together.

        Returns:
            Newly created sectors (empty on a re-run)
        """
        known = {sector.name for sector in self._store.query_all_sectors()}
        created: list[Sector] = []

        for descriptor in descriptors:
            if descriptor.name in known:
                logger.debug("Sector %r already registered, skipping", descriptor.name)
                continue
            sector = Sector(
                name=descriptor.name,
                category=descriptor.category,
                valuation_grade=descriptor.base_valuation,
            )
            self._store.add_sector(sector)
            known.add(sector.name)
            created.append(sector)

        if not created:
            logger.info("Sector registry already seeded (%d sectors)", len(known))
            return created

        try:
            self._store.commit()
        except Exception:
            self._store.rollback()
            raise

        logger.info("Seeded %d new sectors (%d total)", len(created), len(known))
        return created

    def seed_from(self, source: SectorSource) -> list[Sector]:
        """Load descriptors from ``source`` and seed them.

        SourceUnavailable from the source propagates unchanged.
        """
        return self.seed(source.load_sector_descriptors())

    def sectors(self) -> Sequence[Sector]:
        return self._store.query_all_sectors()

    def get(self, sector_id: UUID) -> Optional[Sector]:
        return self._store.get_sector(sector_id=sector_id)

    def find_by_name(self, name: str) -> Optional[Sector]:
        for sector in self._store.query_all_sectors():
            if sector.name == name:
                return sector
        return None

    def select_sector(self) -> Sector:
        """Pick a sector uniformly at random.

        Raises:
            PreconditionFailed: If no sector is registered
        """
        snapshot = list(self._store.query_all_sectors())
        if not snapshot:
            raise PreconditionFailed("No sector available: seed sectors before creating agents")
        return snapshot[self._rng.randrange(len(snapshot))]
