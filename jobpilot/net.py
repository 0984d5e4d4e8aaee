"""HTTP helpers shared by all source connectors.

Keep every retry and header detail here so connectors only describe *what* to
request. Each call is retried a fixed number of times with a linearly growing
delay (`backoff * attempt`), on any non-2xx status or transport error. After the
last attempt the failure is raised as `SourceFetchError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx
from tenacity import AsyncRetrying, RetryCallState, retry_if_exception_type, stop_after_attempt, wait_incrementing

from .errors import SourceFetchError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"User-Agent": "JobPilot/1.0 (Job aggregator)"}


@dataclass(frozen=True)
class RetryPolicy:
    attempts: int = 3
    backoff_s: float = 0.3


async def request_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    source: str,
    policy: RetryPolicy = RetryPolicy(),
    params: Optional[Dict[str, Any]] = None,
    json: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Any:
    """Do one JSON request with bounded retries and return the decoded body."""

    def _log_retry(state: RetryCallState) -> None:
        delay = state.next_action.sleep if state.next_action else 0.0
        exc = state.outcome.exception() if state.outcome else None
        logger.warning(
            "%s: attempt %d for %s failed (%s). Retrying in %.2fs...",
            source,
            state.attempt_number,
            url,
            exc,
            delay,
        )

    retrying = AsyncRetrying(
        stop=stop_after_attempt(policy.attempts),
        wait=wait_incrementing(start=policy.backoff_s, increment=policy.backoff_s),
        retry=retry_if_exception_type(httpx.HTTPError),
        before_sleep=_log_retry,
        reraise=True,
    )

    try:
        async for attempt in retrying:
            with attempt:
                resp = await client.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    headers={**DEFAULT_HEADERS, **(headers or {})},
                )
                resp.raise_for_status()
    except httpx.HTTPError as exc:
        raise SourceFetchError(source, f"{method} {url} failed after {policy.attempts} attempts: {exc}") from exc

    try:
        return resp.json()
    except ValueError as exc:
        raise SourceFetchError(source, f"{method} {url} returned invalid JSON") from exc


async def get_json(client: httpx.AsyncClient, url: str, **kwargs: Any) -> Any:
    return await request_json(client, "GET", url, **kwargs)


async def post_json(client: httpx.AsyncClient, url: str, **kwargs: Any) -> Any:
    return await request_json(client, "POST", url, **kwargs)
