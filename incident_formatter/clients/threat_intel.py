from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from incident_formatter.clients.http import RetryPolicy, request_with_retries
from incident_formatter.core.errors import ConfigurationError, UpstreamFailure, UpstreamUnavailable

logger = logging.getLogger(__name__)

MISSING_KEY = "Threat intelligence API key is not configured."
REPUTATION_FAILED = "Failed to retrieve threat intelligence."


def _upstream_reason(data: Any) -> str:
    if isinstance(data, dict):
        errors = data.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            return str(errors[0].get("detail") or errors[0])
    return "The external API returned a failure status."


class ThreatIntelClient:
    """AbuseIPDB reputation lookup (``/check``)."""

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str],
        *,
        max_age_days: int = 90,
        timeout_s: float = 10.0,
        retry: Optional[RetryPolicy] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.max_age_days = max_age_days
        self.timeout_s = timeout_s
        self.retry = retry or RetryPolicy()
        self._transport = transport

    async def lookup_reputation(self, ip: str) -> Dict[str, Any]:
        if not self.api_key:
            raise ConfigurationError(MISSING_KEY)

        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                resp = await request_with_retries(
                    client,
                    "GET",
                    f"{self.base_url}/check",
                    params={"ipAddress": ip, "maxAgeInDays": self.max_age_days},
                    headers={"Key": self.api_key, "Accept": "application/json"},
                    policy=self.retry,
                )
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error fetching reputation data: %s", e)
            raise UpstreamUnavailable() from e

        if resp.status_code >= 500:
            logger.error("reputation service failed with HTTP %s", resp.status_code)
            raise UpstreamUnavailable()

        if resp.status_code >= 400 or not isinstance(data, dict) or "data" not in data:
            reason = _upstream_reason(data)
            logger.error("reputation service returned an error: %s", reason)
            raise UpstreamFailure(REPUTATION_FAILED, error=reason)

        return data["data"]
