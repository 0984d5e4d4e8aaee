"""Shared fixtures: job/record factories and a mocked httpx client runner."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx
import pytest

from jobpilot.models import Job, JobSource
from jobpilot.net import RetryPolicy
from jobpilot.sources.base import BaseSource

NO_WAIT = RetryPolicy(attempts=3, backoff_s=0.0)


@pytest.fixture
def no_wait() -> RetryPolicy:
    return NO_WAIT


@pytest.fixture
def make_job() -> Callable[..., Job]:
    def _make(**overrides: Any) -> Job:
        data: Dict[str, Any] = {
            "id": "Arbeitnow-it-admin",
            "source": JobSource.ARBEITNOW,
            "title": "IT Systemadministrator (m/w/d)",
            "company": "Tech Solutions GmbH",
            "location": "Berlin",
            "remote": False,
            "url": "https://arbeitnow.com/jobs/1",
            "created_at": datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
            "description": "",
            "exact_match": True,
        }
        data.update(overrides)
        return Job(**data)

    return _make


@pytest.fixture
def arbeitnow_raw() -> Callable[..., Dict[str, Any]]:
    def _raw(slug: str = "it-systemadministrator-mwd-1", **overrides: Any) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "slug": slug,
            "title": "IT Systemadministrator (m/w/d)",
            "company_name": "Tech Solutions GmbH",
            "location": "Berlin",
            "remote": False,
            "url": f"https://arbeitnow.com/jobs/{slug}",
            "tags": ["IT", "Systemadministration", "Windows"],
            "job_types": ["full_time"],
            "created_at": 1714564800,  # 2024-05-01T12:00:00Z
            "description": (
                "Wir suchen einen erfahrenen IT Systemadministrator für unsere Windows-Umgebung. "
                "Zu Ihren Aufgaben gehören die Verwaltung von Active Directory, Exchange Server und VMware. "
                "Kenntnisse in PowerShell sind von Vorteil. Erfahrung mit Ticketsystemen wie Jira ist ein Muss."
            ),
        }
        data.update(overrides)
        return data

    return _raw


class FakeSource(BaseSource):
    """Source returning fixed records or raising a fixed error."""

    def __init__(
        self,
        source: JobSource,
        records: Optional[List[Dict[str, Any]]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        super().__init__(client=None)  # type: ignore[arg-type]
        self.source = source
        self._records = records or []
        self._error = error
        self.calls = 0

    async def fetch(self) -> List[Dict[str, Any]]:
        self.calls += 1
        await asyncio.sleep(0)
        if self._error is not None:
            raise self._error
        return list(self._records)


@pytest.fixture
def fake_source() -> Callable[..., FakeSource]:
    return FakeSource


@pytest.fixture
def run_with_client() -> Callable[..., Any]:
    """Run `coro_factory(client)` against an AsyncClient backed by `handler`."""

    def _run(handler: Callable[[httpx.Request], httpx.Response], coro_factory: Callable[[httpx.AsyncClient], Awaitable[Any]]) -> Any:
        async def _go() -> Any:
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
                return await coro_factory(client)

        return asyncio.run(_go())

    return _run
