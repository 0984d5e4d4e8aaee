"""Jooble jobs source connector.

Docs: https://jooble.org/api/about

Jooble takes a POST body per page. Search terms are OR-combined into one
keyword string and restricted to Germany.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import httpx

from ..keywords import PRIMARY_SEARCH_QUERIES
from ..models import JobSource
from ..net import RetryPolicy
from .base import BaseSource, RawRecord, records_from

logger = logging.getLogger(__name__)


class JoobleSource(BaseSource):
    """Fetch raw Jooble postings."""

    source = JobSource.JOOBLE
    base_url = "https://de.jooble.org/api/{key}"

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        policy: RetryPolicy = RetryPolicy(),
        max_pages: int = 50,
        queries: Sequence[str] = PRIMARY_SEARCH_QUERIES,
        location: str = "Deutschland",
    ) -> None:
        super().__init__(client, policy)
        self._api_key = api_key
        self._max_pages = max_pages
        self._keywords = " | ".join(queries)
        self._location = location

    async def _fetch_page(self, page: int) -> List[RawRecord]:
        body = {"keywords": self._keywords, "location": self._location, "page": page}
        payload = await self._post(self.base_url.format(key=self._api_key), json=body)
        return records_from(payload, "jobs")

    async def fetch(self) -> List[RawRecord]:
        if not self._api_key:
            logger.warning("Jooble API key is not configured; requests will likely be rejected.")
        jobs = await self._paginate(self._fetch_page, self._max_pages, "Jooble")
        logger.info("Fetched %d raw jobs from Jooble with a combined query.", len(jobs))
        return jobs
