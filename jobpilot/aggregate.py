"""Run every source, then normalize, dedupe and sort the combined result."""

from __future__ import annotations

import logging
from typing import List, Sequence

from .dedupe import dedupe_jobs
from .errors import AllSourcesFailedError
from .models import FetchResult, Job, JobSource
from .normalize import normalize_records
from .sources.base import BaseSource
from .utils import gather_settled

logger = logging.getLogger(__name__)


async def fetch_jobs(sources: Sequence[BaseSource]) -> FetchResult:
    """Fetch from all sources concurrently and build one FetchResult.

    A slow or failing source never blocks the others. A source counts as
    failed if it raised or returned no records; failures are reported in
    `failed_sources`, in configured order.

    Raises:
        AllSourcesFailedError: every source failed and no job survived.
    """
    logger.info("Fetching jobs from %d sources...", len(sources))
    outcomes = await gather_settled(src.fetch() for src in sources)

    normalized: List[Job] = []
    failed: List[JobSource] = []
    for src, outcome in zip(sources, outcomes):
        if outcome.ok and outcome.value:
            jobs = normalize_records(outcome.value, src.source)
            logger.info("%s: %d of %d raw jobs admitted.", src.name, len(jobs), len(outcome.value))
            normalized.extend(jobs)
        else:
            reason = outcome.error if not outcome.ok else "empty result"
            logger.error("%s fetch failed or returned no results: %s", src.name, reason)
            failed.append(src.source)

    jobs = dedupe_jobs(normalized)
    # list.sort is stable, also with reverse=True
    jobs.sort(key=lambda j: j.created_at, reverse=True)

    logger.info("Fetched and processed %d unique jobs.", len(jobs))
    if failed:
        logger.warning("Failed to fetch from: %s", ", ".join(s.value for s in failed))

    result = FetchResult(jobs=jobs, failed_sources=failed)
    if not jobs and len(failed) == len(sources):
        raise AllSourcesFailedError(result)
    return result
