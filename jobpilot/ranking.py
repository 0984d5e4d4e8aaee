"""Filtering and sort orders for browsing the job list.

The scores below are simple additive formulas; the weights are module
constants so they can be tuned without touching the logic.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import AbstractSet, Dict, Iterable, List, Literal, Optional, Sequence, Set, Tuple

from pydantic import BaseModel, Field

from .keywords import HEALTHCARE_KEYWORDS
from .models import ALL_SOURCES, Job, JobSource
from .normalize import check_keywords

SortBy = Literal["date", "relevance", "career_changer"]

FAVORITE_WEIGHT = 1000
EXACT_MATCH_WEIGHT = 100
SKILL_WEIGHT = 10
JUNIOR_WEIGHT = 20
CAREER_SWITCH_WEIGHT = 20

COUNSELING_WEIGHTS = {"career_switch": 2, "is_junior": 1, "remote": 1}


class JobFilters(BaseModel):
    search_term: str = ""
    days: Optional[int] = Field(default=None, description="Only postings at most this many days old.")
    career_change_only: bool = False
    location: str = ""
    is_remote: Optional[bool] = None
    is_junior: bool = False
    skills: List[str] = Field(default_factory=list)
    skill_logic: Literal["AND", "OR"] = "AND"
    sources: List[JobSource] = Field(default_factory=lambda: list(ALL_SOURCES))
    favorites_only: bool = False


def filter_jobs(
    jobs: Iterable[Job],
    filters: JobFilters,
    favorites: AbstractSet[str] = frozenset(),
    now: Optional[datetime] = None,
) -> List[Job]:
    now = now or datetime.now(timezone.utc)
    out: List[Job] = []
    for job in jobs:
        if filters.favorites_only and job.id not in favorites:
            continue
        if filters.days and (now - job.created_at).total_seconds() / 86400 > filters.days:
            continue
        if filters.search_term and filters.search_term.lower() not in job.title.lower():
            continue
        if filters.career_change_only and not job.career_switch:
            continue
        if filters.is_junior and not job.is_junior:
            continue
        if filters.is_remote is not None and job.remote != filters.is_remote:
            continue
        if filters.skills:
            hits = [s in job.requirements for s in filters.skills]
            if filters.skill_logic == "AND" and not all(hits):
                continue
            if filters.skill_logic == "OR" and not any(hits):
                continue
        if job.source not in filters.sources:
            continue
        if filters.location and filters.location.lower() not in job.location.lower():
            continue
        out.append(job)
    return out


def relevance_score(job: Job, filters: JobFilters, favorites: AbstractSet[str] = frozenset()) -> int:
    score = 0
    if job.id in favorites:
        score += FAVORITE_WEIGHT
    if job.exact_match:
        score += EXACT_MATCH_WEIGHT
    if filters.skills:
        score += SKILL_WEIGHT * sum(1 for req in job.requirements if req in filters.skills)
    if filters.is_junior and job.is_junior:
        score += JUNIOR_WEIGHT
    if filters.career_change_only and job.career_switch:
        score += CAREER_SWITCH_WEIGHT
    return score


def company_stats(jobs: Iterable[Job]) -> Dict[str, Tuple[int, int]]:
    """company -> (total postings, career-switch postings)."""
    stats: Dict[str, Tuple[int, int]] = {}
    for job in jobs:
        total, switch = stats.get(job.company, (0, 0))
        stats[job.company] = (total + 1, switch + int(job.career_switch))
    return stats


def career_changer_friendly_companies(jobs: Iterable[Job]) -> Set[str]:
    """Companies with 2+ career-switch postings, or at least half of them."""
    friendly: Set[str] = set()
    for company, (total, switch) in company_stats(jobs).items():
        if switch >= 2 or (switch > 0 and switch / total >= 0.5):
            friendly.add(company)
    return friendly


def _newest_first(jobs: Iterable[Job]) -> List[Job]:
    return sorted(jobs, key=lambda j: j.created_at, reverse=True)


def sort_jobs(
    jobs: Sequence[Job],
    sort_by: SortBy = "date",
    filters: Optional[JobFilters] = None,
    favorites: AbstractSet[str] = frozenset(),
    friendly: Optional[Set[str]] = None,
) -> List[Job]:
    """Sort for display; every order falls back to newest first."""
    ordered = _newest_first(jobs)
    if sort_by == "relevance":
        filters = filters or JobFilters()
        return sorted(ordered, key=lambda j: relevance_score(j, filters, favorites), reverse=True)
    if sort_by == "career_changer":
        if friendly is None:
            friendly = career_changer_friendly_companies(jobs)
        return sorted(ordered, key=lambda j: j.company not in friendly)
    return sorted(ordered, key=lambda j: j.id not in favorites)


def counseling_score(job: Job) -> int:
    return sum(weight for attr, weight in COUNSELING_WEIGHTS.items() if getattr(job, attr))


def counseling_jobs(jobs: Iterable[Job]) -> List[Tuple[Job, int]]:
    """Healthcare-related postings with their counseling score, best first."""
    scored = [
        (job, counseling_score(job))
        for job in jobs
        if check_keywords(f"{job.title} {job.description}", HEALTHCARE_KEYWORDS)
    ]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored


def count_new_jobs(previous_ids: AbstractSet[str], jobs: Iterable[Job]) -> int:
    """Number of jobs whose id was not in the previous snapshot."""
    return sum(1 for job in jobs if job.id not in previous_ids)
