"""Exception types raised by the aggregation engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import FetchResult


class JobPilotError(Exception):
    """Base class for all engine errors."""


class SourceFetchError(JobPilotError):
    """A source adapter could not fetch its records after all retries."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source


class AllSourcesFailedError(JobPilotError):
    """Every configured source failed and no job survived.

    The empty result is attached so callers can still show which sources
    were attempted.
    """

    def __init__(self, result: "FetchResult") -> None:
        names = ", ".join(s.value for s in result.failed_sources)
        super().__init__(f"All job sources failed: {names}")
        self.result = result


class CacheError(JobPilotError):
    """The durable cache store could not be read or written."""
