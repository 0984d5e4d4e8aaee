"""Adzuna jobs source connector.

Docs: https://developer.adzuna.com/docs/search

All search queries are combined into one `what_or` query, which Adzuna
answers far more efficiently than one request per keyword. Pages are fetched
until an empty or failing page.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence

import httpx

from ..keywords import PRIMARY_SEARCH_QUERIES
from ..models import JobSource
from ..net import RetryPolicy
from .base import BaseSource, RawRecord, records_from

logger = logging.getLogger(__name__)


class AdzunaSource(BaseSource):
    """Fetch raw Adzuna postings for Germany."""

    source = JobSource.ADZUNA
    base_url = "https://api.adzuna.com/v1/api/jobs/de/search/{page}"

    def __init__(
        self,
        client: httpx.AsyncClient,
        app_id: str,
        app_key: str,
        policy: RetryPolicy = RetryPolicy(),
        max_pages: int = 20,
        queries: Sequence[str] = PRIMARY_SEARCH_QUERIES,
        results_per_page: int = 50,
    ) -> None:
        super().__init__(client, policy)
        self._app_id = app_id
        self._app_key = app_key
        self._max_pages = max_pages
        self._queries = list(queries)
        self._results_per_page = results_per_page

    async def _fetch_page(self, page: int) -> List[RawRecord]:
        params: Dict[str, Any] = {
            "app_id": self._app_id,
            "app_key": self._app_key,
            "results_per_page": self._results_per_page,
            "what_or": " ".join(self._queries),
            "content-type": "application/json",
        }
        payload = await self._get(self.base_url.format(page=page), params=params)
        return records_from(payload, "results")

    async def fetch(self) -> List[RawRecord]:
        if not (self._app_id and self._app_key):
            logger.warning("Adzuna credentials are not configured; requests will likely be rejected.")
        jobs = await self._paginate(self._fetch_page, self._max_pages, "Adzuna")
        logger.info("Fetched %d raw jobs from Adzuna with a combined query.", len(jobs))
        return jobs
