"""GermanTechJobs source connector.

The endpoint returns the whole board as one JSON list; there is no
pagination. Every record is passed on and the normalizer decides what is kept.
"""

from __future__ import annotations

import logging
from typing import List

from ..models import JobSource
from .base import BaseSource, RawRecord, records_from

logger = logging.getLogger(__name__)


class GermanTechJobsSource(BaseSource):
    source = JobSource.GERMANTECHJOBS
    base_url = "https://germantechjobs.de/api/jobs"

    async def fetch(self) -> List[RawRecord]:
        payload = await self._get(self.base_url)
        jobs = records_from(payload, "jobs")
        logger.info("Fetched %d raw jobs from GermanTechJobs.", len(jobs))
        return jobs
