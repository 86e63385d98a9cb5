"""Outbound HTTP helpers shared by the lookup clients.

Wraps a single call with bounded retries and exponential backoff on transport
errors, 429 and 5xx. Anything else is handed back to the caller as-is.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from typing import Any, Optional

import httpx


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 2
    retry_on_statuses: tuple[int, ...] = (429,)
    backoff_s: float = 0.25


def backoff_seconds(policy: RetryPolicy, attempt: int) -> float:
    base = policy.backoff_s * (2 ** attempt)
    return base + random.uniform(0.0, policy.backoff_s)


async def request_with_retries(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    policy: Optional[RetryPolicy] = None,
    **kwargs: Any,
) -> httpx.Response:
    policy = policy or RetryPolicy()
    attempt = 0
    while True:
        try:
            resp = await client.request(method, url, **kwargs)
        except httpx.TransportError:
            if attempt >= policy.max_retries:
                raise
        else:
            status_code = resp.status_code
            should_retry = status_code in policy.retry_on_statuses or 500 <= status_code <= 599
            if not should_retry or attempt >= policy.max_retries:
                return resp

        await asyncio.sleep(backoff_seconds(policy, attempt))
        attempt += 1


__all__ = ["RetryPolicy", "backoff_seconds", "request_with_retries"]
