"""Data models for the aggregation engine.

Every source is mapped into the same canonical `Job` record, so the rest of the
pipeline (dedupe, cache, statistics, ranking) never looks at provider-specific
payloads. The original payload is kept in `raw` so a record can be re-parsed
without re-fetching.

This file uses Pydantic v2.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class JobSource(str, Enum):
    """One tag per external job board."""

    ARBEITNOW = "Arbeitnow"
    ADZUNA = "Adzuna"
    JOOBLE = "Jooble"
    GERMANTECHJOBS = "GermanTechJobs"
    JOBICY = "Jobicy"
    ARBEITSAGENTUR = "Arbeitsagentur"


ALL_SOURCES: List[JobSource] = list(JobSource)


class Job(BaseModel):
    """A normalized job posting.

    A Job only exists if it passed the admission filter: title, company,
    location, creation time and the source-native id were all present and the
    location is German or German-eligible remote.
    """

    id: str = Field(..., description="'<source>-<source-native id>', unique within one fetch.")
    source: JobSource

    title: str
    company: str
    location: str
    remote: bool = False
    url: str = ""
    created_at: datetime = Field(..., description="Posting time, timezone-aware UTC.")
    description: str = ""

    tags: List[str] = Field(default_factory=list)
    job_types: List[str] = Field(default_factory=list)

    exact_match: bool = False
    career_switch: bool = False
    is_junior: bool = False
    requirements: List[str] = Field(
        default_factory=list,
        description="Skill taxonomy keys found in the description, each at most once.",
    )

    raw: Dict[str, Any] = Field(default_factory=dict, description="Original payload.")


class FetchResult(BaseModel):
    """Jobs (newest first) plus the sources that produced nothing usable."""

    model_config = ConfigDict(populate_by_name=True)

    jobs: List[Job] = Field(default_factory=list)
    failed_sources: List[JobSource] = Field(default_factory=list, alias="failedSources")


class CacheEntry(BaseModel):
    """Durable cache record, replaced wholesale on every successful fetch."""

    timestamp: int = Field(..., description="Fetch instant in epoch milliseconds.")
    data: FetchResult


class RequirementCount(BaseModel):
    key: str
    count: int


class ExampleJob(BaseModel):
    job_id: str
    title: str
    company: str
    url: str


class StatsData(BaseModel):
    """Requirement statistics over the target-role postings.

    `time_series` holds one dict per month: `{"month": "YYYY-MM", <key>: count, ...}`.
    """

    total_jobs: int = 0
    requirement_counts: List[RequirementCount] = Field(default_factory=list)
    time_series: List[Dict[str, Any]] = Field(default_factory=list)
    examples: Dict[str, List[ExampleJob]] = Field(default_factory=dict)
