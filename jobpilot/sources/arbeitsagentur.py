"""Bundesagentur fuer Arbeit (Jobsuche) source connector.

Docs: https://jobsuche.api.bund.dev/

The Jobsuche API rewards narrow queries, so we run one paginated query per
search term. All queries run concurrently; a failing query is logged and
dropped while the others still count.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import httpx

from ..keywords import PRIMARY_SEARCH_QUERIES
from ..models import JobSource
from ..net import RetryPolicy
from ..utils import gather_settled
from .base import BaseSource, RawRecord, records_from

logger = logging.getLogger(__name__)


class ArbeitsagenturSource(BaseSource):
    source = JobSource.ARBEITSAGENTUR
    base_url = "https://rest.arbeitsagentur.de/jobboerse/jobsuche-service/pc/v4/jobs"

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str = "jobboerse-jobsuche",
        policy: RetryPolicy = RetryPolicy(),
        max_pages: int = 20,
        queries: Sequence[str] = PRIMARY_SEARCH_QUERIES,
        page_size: int = 50,
    ) -> None:
        super().__init__(client, policy)
        self._api_key = api_key
        self._max_pages = max_pages
        self._queries = list(queries)
        self._page_size = page_size

    async def _fetch_query(self, query: str) -> List[RawRecord]:
        async def fetch_page(page: int) -> List[RawRecord]:
            # angebotsart=1 -> regular employment ("Arbeit")
            params = {"was": query, "page": page, "size": self._page_size, "angebotsart": 1}
            payload = await self._get(self.base_url, params=params, headers={"X-API-Key": self._api_key})
            return records_from(payload, "stellenangebote")

        jobs = await self._paginate(fetch_page, self._max_pages, f"Arbeitsagentur [{query}]")
        logger.info("Arbeitsagentur: fetched %d raw jobs for query %r.", len(jobs), query)
        return jobs

    async def fetch(self) -> List[RawRecord]:
        outcomes = await gather_settled(self._fetch_query(q) for q in self._queries)

        jobs: List[RawRecord] = []
        for query, outcome in zip(self._queries, outcomes):
            if outcome.ok:
                jobs.extend(outcome.value or [])
            else:
                logger.error("Arbeitsagentur: query %r failed: %s", query, outcome.error)

        logger.info("Fetched %d raw jobs from Arbeitsagentur across %d queries.", len(jobs), len(self._queries))
        return jobs
