"""Jobicy remote jobs source connector.

Docs: https://jobicy.com/jobs-rss-feed

All Jobicy postings are remote. The geo filter of the API returned nothing
for Germany, so we only filter by industry and tags and leave location
admission to the normalizer.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import httpx

from ..keywords import JOBICY_TAGS
from ..models import JobSource
from ..net import RetryPolicy
from .base import BaseSource, RawRecord, records_from

logger = logging.getLogger(__name__)


class JobicySource(BaseSource):
    source = JobSource.JOBICY
    base_url = "https://jobicy.com/api/v2/remote-jobs"

    def __init__(
        self,
        client: httpx.AsyncClient,
        policy: RetryPolicy = RetryPolicy(),
        tags: Sequence[str] = JOBICY_TAGS,
        count: int = 500,
    ) -> None:
        super().__init__(client, policy)
        self._tags = list(tags)
        self._count = count

    async def fetch(self) -> List[RawRecord]:
        params = {"count": self._count, "industry": "it", "tag": ",".join(self._tags)}
        payload = await self._get(self.base_url, params=params)
        jobs = records_from(payload, "jobs")
        logger.info("Fetched %d targeted raw jobs from Jobicy.", len(jobs))
        return jobs
