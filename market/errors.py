"""Error taxonomy for the market core.

Declined operations (a debit or stock removal that would go negative) are not
errors; they are reported as ``False`` by the entity.
"""

from __future__ import annotations


class MarketError(Exception):
    """Base exception for market core errors."""


class InvalidArgument(MarketError, ValueError):
    """Malformed input to a constructor or mutator.

    Always raised before any state change.
    """


class PreconditionFailed(MarketError):
    """A required relational dependency is absent (e.g. no sector registered)."""


class SourceUnavailable(MarketError):
    """An external collaborator (sector source, persistence store) could not be read or written."""

    def __init__(self, message: str, *, resource: str | None = None) -> None:
        super().__init__(message)
        self.resource = resource
