"""Utility helpers shared across the engine."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Generic, Iterable, List, Optional, TypeVar

T = TypeVar("T")


def uniq_preserve_order(items: Iterable[str]) -> List[str]:
    """Deduplicate while preserving first-seen order."""
    seen = set()
    out: List[str] = []
    for it in items:
        if not it:
            continue
        key = it.strip().lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(it)
    return out


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Normalize the timestamp formats the sources use to an aware UTC datetime.

    Accepts epoch seconds or milliseconds (numbers or digit strings) and
    ISO-like strings ("...Z", offsets, space separator, date only). Naive values
    are read as UTC. Returns None for anything unparseable.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            ts = float(value)
            # Some providers send epoch in ms.
            if ts > 1e12:
                ts /= 1000.0
            return datetime.fromtimestamp(ts, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            if text.isdigit():
                return parse_timestamp(int(text))
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            # shifting near year 1 or 9999 leaves the supported range
            return parsed.astimezone(timezone.utc)
        except (OverflowError, ValueError):
            return None

    return None


def epoch_ms(moment: datetime) -> int:
    """Epoch milliseconds; naive datetimes are read as local time."""
    return int(moment.timestamp() * 1000)


@dataclass
class Outcome(Generic[T]):
    """Result of one task in an all-settled join: a value or the error it raised."""

    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def gather_settled(aws: Iterable[Awaitable[T]]) -> List[Outcome[T]]:
    """Await every awaitable to completion or failure.

    One failing task never cancels its siblings. Outcomes are returned in
    input order.
    """
    results = await asyncio.gather(*aws, return_exceptions=True)
    outcomes: List[Outcome[T]] = []
    for res in results:
        if isinstance(res, Exception):
            outcomes.append(Outcome(error=res))
        elif isinstance(res, BaseException):
            raise res
        else:
            outcomes.append(Outcome(value=res))
    return outcomes
