"""Arbeitnow jobs source connector.

Docs: https://www.arbeitnow.com/api/job-board-api

We paginate through the public job board API. The first page has to succeed;
later pages are best effort.
"""

from __future__ import annotations

import logging
from typing import List

import httpx

from ..models import JobSource
from ..net import RetryPolicy
from .base import BaseSource, RawRecord, records_from

logger = logging.getLogger(__name__)


class ArbeitnowSource(BaseSource):
    """Fetch raw Arbeitnow postings."""

    source = JobSource.ARBEITNOW
    base_url = "https://www.arbeitnow.com/api/job-board-api"

    def __init__(self, client: httpx.AsyncClient, policy: RetryPolicy = RetryPolicy(), max_pages: int = 3) -> None:
        super().__init__(client, policy)
        self._max_pages = max_pages

    async def _fetch_page(self, page: int) -> List[RawRecord]:
        payload = await self._get(self.base_url, params={"page": page})
        return records_from(payload, "data")

    async def fetch(self) -> List[RawRecord]:
        logger.info("Fetching jobs from Arbeitnow...")
        jobs = await self._paginate(self._fetch_page, self._max_pages, "Arbeitnow", raise_on_first_page=True)
        logger.info("Fetched %d raw jobs from Arbeitnow.", len(jobs))
        return jobs
