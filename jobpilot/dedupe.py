"""Collapse postings that denote the same real job.

The key is coarser than `Job.id`: the same posting cross-listed on two boards
collapses to whichever copy was seen first.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from .models import Job
from .normalize import normalize_text


def dedupe_key(job: Job) -> str:
    return "|".join([normalize_text(job.title), normalize_text(job.company), normalize_text(job.location)])


def dedupe_jobs(jobs: Iterable[Job]) -> List[Job]:
    """Keep the first job per (title, company, location) key, in input order."""
    seen: Dict[str, Job] = {}
    for job in jobs:
        seen.setdefault(dedupe_key(job), job)
    return list(seen.values())
