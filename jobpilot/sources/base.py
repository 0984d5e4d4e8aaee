"""Base class for source connectors."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List

import httpx

from ..errors import SourceFetchError
from ..models import JobSource
from ..net import RetryPolicy, get_json, post_json

logger = logging.getLogger(__name__)

RawRecord = Dict[str, Any]


def records_from(payload: Any, key: str) -> List[RawRecord]:
    """Pull the record list out of a provider payload, tolerating missing keys."""
    if isinstance(payload, dict):
        payload = payload.get(key)
    if not isinstance(payload, list):
        return []
    return [r for r in payload if isinstance(r, dict)]


class BaseSource(ABC):
    """Fetches provider-native records from one job board.

    Connectors never normalize; they return raw records and leave mapping to
    `normalize.normalize_job`.
    """

    source: JobSource

    def __init__(self, client: httpx.AsyncClient, policy: RetryPolicy = RetryPolicy()) -> None:
        self._client = client
        self._policy = policy

    @property
    def name(self) -> str:
        return self.source.value

    @abstractmethod
    async def fetch(self) -> List[RawRecord]:
        """Fetch raw records, or raise SourceFetchError."""
        raise NotImplementedError

    async def _get(self, url: str, **kwargs: Any) -> Any:
        return await get_json(self._client, url, source=self.name, policy=self._policy, **kwargs)

    async def _post(self, url: str, **kwargs: Any) -> Any:
        return await post_json(self._client, url, source=self.name, policy=self._policy, **kwargs)

    async def _paginate(
        self,
        fetch_page: Callable[[int], Awaitable[List[RawRecord]]],
        max_pages: int,
        label: str,
        raise_on_first_page: bool = False,
    ) -> List[RawRecord]:
        """Request pages 1..max_pages strictly in order.

        Stops on the first empty page or the first failing page; records from
        earlier pages are kept.
        """
        out: List[RawRecord] = []
        for page in range(1, max_pages + 1):
            try:
                records = await fetch_page(page)
            except SourceFetchError as exc:
                if page == 1 and raise_on_first_page:
                    raise
                logger.error("%s: page %d failed, keeping %d records: %s", label, page, len(out), exc)
                break
            if not records:
                logger.info("%s: no more results on page %d. Stopping.", label, page)
                break
            out.extend(records)
        return out
