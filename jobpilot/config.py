"""Environment-based settings.

Secrets (API keys) and tuning knobs come from environment variables; a `.env`
file in the working directory is loaded first.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import httpx
from dotenv import load_dotenv

from .models import ALL_SOURCES, JobSource
from .net import RetryPolicy
from .sources import (
    AdzunaSource,
    ArbeitnowSource,
    ArbeitsagenturSource,
    BaseSource,
    GermanTechJobsSource,
    JobicySource,
    JoobleSource,
)

DEFAULT_CACHE_DIR = Path("~/.cache/jobpilot")
PUBLIC_BA_API_KEY = "jobboerse-jobsuche"


def _parse_sources(raw: str) -> List[JobSource]:
    if not raw.strip():
        return list(ALL_SOURCES)
    by_name = {s.value.lower(): s for s in JobSource}
    out: List[JobSource] = []
    for name in (p.strip().lower() for p in raw.split(",")):
        if not name:
            continue
        if name not in by_name:
            raise ValueError(f"Unknown job source in JOBPILOT_SOURCES: {name!r}")
        out.append(by_name[name])
    return out


@dataclass
class Settings:
    adzuna_app_id: str = ""
    adzuna_app_key: str = ""
    jooble_api_key: str = ""
    ba_api_key: str = PUBLIC_BA_API_KEY
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    cache_dir: Path = DEFAULT_CACHE_DIR
    sources: List[JobSource] = field(default_factory=lambda: list(ALL_SOURCES))
    arbeitnow_pages: int = 3
    adzuna_pages: int = 20
    jooble_pages: int = 50
    arbeitsagentur_pages: int = 20
    http_timeout: float = 20.0
    http_retries: int = 3
    http_backoff: float = 0.3

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            adzuna_app_id=os.getenv("ADZUNA_APP_ID", ""),
            adzuna_app_key=os.getenv("ADZUNA_APP_KEY", ""),
            jooble_api_key=os.getenv("JOOBLE_API_KEY", ""),
            ba_api_key=os.getenv("BA_API_KEY", PUBLIC_BA_API_KEY),
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            cache_dir=Path(os.getenv("JOBPILOT_CACHE_DIR", str(DEFAULT_CACHE_DIR))),
            sources=_parse_sources(os.getenv("JOBPILOT_SOURCES", "")),
            arbeitnow_pages=int(os.getenv("ARBEITNOW_PAGES", "3")),
            adzuna_pages=int(os.getenv("ADZUNA_PAGES", "20")),
            jooble_pages=int(os.getenv("JOOBLE_PAGES", "50")),
            arbeitsagentur_pages=int(os.getenv("ARBEITSAGENTUR_PAGES", "20")),
            http_timeout=float(os.getenv("HTTP_TIMEOUT", "20")),
            http_retries=int(os.getenv("HTTP_RETRIES", "3")),
            http_backoff=float(os.getenv("HTTP_BACKOFF", "0.3")),
        )

    @property
    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(attempts=self.http_retries, backoff_s=self.http_backoff)


def build_sources(settings: Settings, client: httpx.AsyncClient) -> List[BaseSource]:
    """Instantiate the enabled connectors, in configured order, sharing one client."""
    policy = settings.retry_policy
    factories = {
        JobSource.ARBEITNOW: lambda: ArbeitnowSource(client, policy, max_pages=settings.arbeitnow_pages),
        JobSource.ADZUNA: lambda: AdzunaSource(
            client, settings.adzuna_app_id, settings.adzuna_app_key, policy, max_pages=settings.adzuna_pages
        ),
        JobSource.JOOBLE: lambda: JoobleSource(client, settings.jooble_api_key, policy, max_pages=settings.jooble_pages),
        JobSource.GERMANTECHJOBS: lambda: GermanTechJobsSource(client, policy),
        JobSource.JOBICY: lambda: JobicySource(client, policy),
        JobSource.ARBEITSAGENTUR: lambda: ArbeitsagenturSource(
            client, settings.ba_api_key, policy, max_pages=settings.arbeitsagentur_pages
        ),
    }
    return [factories[s]() for s in settings.sources]
