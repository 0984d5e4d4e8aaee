"""Requirement statistics over the cached job list.

Only target-role postings (`exact_match`) are counted. The reduction is pure;
`fetch_statistics` just reads the job list through the cache first.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import timezone
from typing import TYPE_CHECKING, Dict, Iterable, List

from .models import ExampleJob, Job, RequirementCount, StatsData

if TYPE_CHECKING:
    from .cache import JobCache

logger = logging.getLogger(__name__)

MAX_REQUIREMENTS = 100
MAX_EXAMPLES = 10


def month_of(job: Job) -> str:
    return job.created_at.astimezone(timezone.utc).strftime("%Y-%m")


def compute_statistics(jobs: Iterable[Job], only_career_change: bool = False) -> StatsData:
    """Count requirements, bucket them per month and collect example postings.

    `requirement_counts` is sorted by count descending (ties keep first-seen
    order) and capped at 100 entries; every key has at most 10 examples.
    """
    selected = [j for j in jobs if j.exact_match]
    if only_career_change:
        selected = [j for j in selected if j.career_switch]

    counts: Counter[str] = Counter()
    examples: Dict[str, List[ExampleJob]] = {}
    per_month: Dict[str, Counter[str]] = {}

    for job in selected:
        month = per_month.setdefault(month_of(job), Counter())
        for req in job.requirements:
            counts[req] += 1
            month[req] += 1
            bucket = examples.setdefault(req, [])
            if len(bucket) < MAX_EXAMPLES:
                bucket.append(ExampleJob(job_id=job.id, title=job.title, company=job.company, url=job.url))

    # Counter.most_common keeps insertion order for equal counts.
    top = [RequirementCount(key=k, count=c) for k, c in counts.most_common(MAX_REQUIREMENTS)]

    time_series = [{"month": month, **dict(per_month[month])} for month in sorted(per_month)]

    return StatsData(
        total_jobs=len(selected),
        requirement_counts=top,
        time_series=time_series,
        examples=examples,
    )


async def fetch_statistics(cache: "JobCache", only_career_change: bool = False) -> StatsData:
    logger.info("Generating statistics with only_career_change=%s...", only_career_change)
    result = await cache.get()
    return compute_statistics(result.jobs, only_career_change)
