"""JSON-backed sector source.

The seed file is a JSON array of objects::

    [{"Name": "Tech", "PrimarySector": "Technology", "BaseValuation": 1.5}, ...]

snake_case keys (``name``, ``category``, ``base_valuation``) are accepted too.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence, Union

from pydantic import TypeAdapter, ValidationError

from market.errors import InvalidArgument, SourceUnavailable
from market.persistence.interfaces import SectorSource
from market.types import SectorDescriptor

logger = logging.getLogger(__name__)

_DESCRIPTORS = TypeAdapter(list[SectorDescriptor])


class JsonSectorSource(SectorSource):
    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load_sector_descriptors(self) -> Sequence[SectorDescriptor]:
        """Load and validate sector descriptors.

        Returns:
            Descriptors in file order (``null`` or ``[]`` yields an empty list)

        Raises:
            SourceUnavailable: If the file is missing, unreadable or not JSON
            InvalidArgument: If an entry fails validation
        """
        if not self._path.is_file():
            raise SourceUnavailable(f"Sector seed file not found: {self._path}", resource=str(self._path))

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnavailable(f"Sector seed file is unreadable: {self._path}", resource=str(self._path)) from exc
        except json.JSONDecodeError as exc:
            raise SourceUnavailable(
                f"Sector seed file is not valid JSON: {self._path} ({exc.msg} at line {exc.lineno})",
                resource=str(self._path),
            ) from exc

        if raw is None:
            return []

        try:
            descriptors = _DESCRIPTORS.validate_python(raw)
        except ValidationError as exc:
            raise InvalidArgument(f"Invalid sector descriptor in {self._path}: {exc}") from exc

        logger.info("Loaded %d sector descriptors from %s", len(descriptors), self._path.name)
        return descriptors


class StaticSectorSource(SectorSource):
    """Sector source over an in-process list (fixtures, programmatic seeding)."""

    def __init__(self, descriptors: Sequence[SectorDescriptor]) -> None:
        self._descriptors = list(descriptors)

    def load_sector_descriptors(self) -> Sequence[SectorDescriptor]:
        return list(self._descriptors)
