"""Weekly job cache in front of the aggregator.

Two stores are consulted before any network activity:

1. `MemoryCache`, a single in-process slot, cleared only by a forced refresh
   or a restart.
2. A durable key-value store (`JsonFileStore`), whose entry is fresh while its
   timestamp is at or after the most recent Sunday 00:00 local time.

Entries are only ever replaced wholesale. A refresh that fails because every
source is down leaves both stores untouched, so the previous snapshot stays
available. Read and write problems on the durable store are logged and treated
as a cache miss; they never fail a fetch.
"""

from __future__ import annotations

import asyncio
import logging
import os
from datetime import datetime, timedelta
from pathlib import Path
from typing import Awaitable, Callable, Optional, Set

from pydantic import ValidationError

from .errors import CacheError
from .models import CacheEntry, FetchResult
from .utils import epoch_ms

logger = logging.getLogger(__name__)

JOB_CACHE_KEY = "jobpilot-job-cache"

Fetcher = Callable[[], Awaitable[FetchResult]]
Clock = Callable[[], datetime]


def week_start(now: datetime) -> datetime:
    """Most recent Sunday 00:00:00 at or before `now` (same tz semantics as `now`)."""
    days_since_sunday = (now.weekday() + 1) % 7
    start = now - timedelta(days=days_since_sunday)
    return start.replace(hour=0, minute=0, second=0, microsecond=0)


class MemoryCache:
    """Single shared slot holding the current FetchResult."""

    def __init__(self) -> None:
        self._result: Optional[FetchResult] = None

    def get(self) -> Optional[FetchResult]:
        return self._result

    def set(self, result: FetchResult) -> None:
        self._result = result

    def clear(self) -> None:
        self._result = None


class JsonFileStore:
    """Durable key-value store: one UTF-8 JSON file per key in a directory."""

    def __init__(self, directory: Path) -> None:
        self._dir = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        try:
            return self._path(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise CacheError(f"Could not read {self._path(key)}: {exc}") from exc

    def write(self, key: str, text: str) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp.write_text(text, encoding="utf-8")
            os.replace(tmp, path)
        except OSError as exc:
            raise CacheError(f"Could not write {path}: {exc}") from exc

    def remove(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as exc:
            raise CacheError(f"Could not remove {self._path(key)}: {exc}") from exc


class JobCache:
    """Serve FetchResults from memory or the weekly durable snapshot, else fetch.

    Concurrent non-forced calls share one in-flight fetch.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        store: JsonFileStore,
        memory: Optional[MemoryCache] = None,
        clock: Clock = datetime.now,
        key: str = JOB_CACHE_KEY,
    ) -> None:
        self._fetcher = fetcher
        self._store = store
        self._memory = memory if memory is not None else MemoryCache()
        self._clock = clock
        self._key = key
        self._inflight: Optional["asyncio.Future[FetchResult]"] = None

    async def get(self, force_refresh: bool = False) -> FetchResult:
        if force_refresh:
            logger.info("Forcing refresh, bypassing all caches...")
            self._inflight = asyncio.ensure_future(self._refresh())
            return await self._inflight

        cached = self._memory.get()
        if cached is not None:
            logger.info("Loading jobs from in-memory cache.")
            return cached

        durable = self._load_fresh()
        if durable is not None:
            self._memory.set(durable)
            return durable

        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.ensure_future(self._refresh())
        return await self._inflight

    def previous_job_ids(self) -> Set[str]:
        """Job ids of the durable snapshot, fresh or not (empty if unreadable)."""
        entry = self._read_entry()
        if entry is None:
            return set()
        return {job.id for job in entry.data.jobs}

    async def _refresh(self) -> FetchResult:
        # AllSourcesFailedError propagates before either store is touched.
        result = await self._fetcher()
        self._memory.set(result)
        self._persist(result)
        return result

    def _read_entry(self) -> Optional[CacheEntry]:
        try:
            text = self._store.read(self._key)
        except CacheError as exc:
            logger.error("Failed to read from job cache: %s", exc)
            return None
        if text is None:
            return None
        try:
            return CacheEntry.model_validate_json(text)
        except ValidationError as exc:
            logger.error("Job cache is corrupt, discarding it: %s", exc)
            self._discard()
            return None

    def _load_fresh(self) -> Optional[FetchResult]:
        entry = self._read_entry()
        if entry is None:
            return None
        boundary = epoch_ms(week_start(self._clock()))
        if entry.timestamp >= boundary:
            logger.info("Loading jobs from durable cache (cache is from this week).")
            return entry.data
        logger.info("Durable cache is stale (from before last Sunday).")
        self._discard()
        return None

    def _persist(self, result: FetchResult) -> None:
        entry = CacheEntry(timestamp=epoch_ms(self._clock()), data=result)
        try:
            self._store.write(self._key, entry.model_dump_json(by_alias=True))
            logger.info("Jobs saved to durable cache.")
        except CacheError as exc:
            logger.error("Failed to save jobs to durable cache: %s", exc)

    def _discard(self) -> None:
        try:
            self._store.remove(self._key)
        except CacheError as exc:
            logger.error("Failed to remove job cache entry: %s", exc)
