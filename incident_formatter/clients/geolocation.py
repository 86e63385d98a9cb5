from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

import httpx

from incident_formatter.clients.http import RetryPolicy, request_with_retries
from incident_formatter.core.errors import UpstreamFailure, UpstreamUnavailable

logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_FIELDS = (
    "status,message,country,countryCode,region,regionName,city,zip,lat,lon,timezone,isp,org,as,query"
)
DEFAULT_BATCH_FIELDS = "status,message,query,country,city"
# always requested so success/failure can be told apart
REQUIRED_FIELDS = ("status", "message", "query")

LOOKUP_FAILED = "Failed to retrieve IP information."


def fields_query(requested: Union[str, Sequence[str], None], default: str) -> str:
    if not requested:
        return default
    if isinstance(requested, str):
        requested = requested.split(",")
    names = [f.strip() for f in requested if isinstance(f, str) and f.strip()]
    return ",".join(dict.fromkeys([*names, *REQUIRED_FIELDS]))


class GeolocationClient:
    """ip-api.com proxy: single lookup and batch lookup."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_s: float = 10.0,
        retry: Optional[RetryPolicy] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.retry = retry or RetryPolicy()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport)

    async def lookup(self, ip: str = "", fields: Union[str, Sequence[str], None] = None) -> List[Dict[str, Any]]:
        url = f"{self.base_url}/json/{ip}"
        query = fields_query(fields, DEFAULT_LOOKUP_FIELDS)
        logger.info("Making request to: %s?fields=%s", url, query)

        try:
            async with self._client() as client:
                resp = await request_with_retries(
                    client, "GET", url, params={"fields": query}, policy=self.retry
                )
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error fetching data from ip-api: %s", e)
            raise UpstreamUnavailable() from e

        if not isinstance(data, dict):
            logger.error("ip-api returned an unexpected payload: %r", type(data).__name__)
            raise UpstreamUnavailable()

        if data.get("status") == "success":
            return [data]

        logger.error("ip-api returned an error: %s", data.get("message"))
        raise UpstreamFailure(
            LOOKUP_FAILED,
            error=data.get("message") or "The external API returned a failure status.",
        )

    async def lookup_batch(
        self, ips: Sequence[Any], fields: Union[str, Sequence[str], None] = None
    ) -> List[Dict[str, Any]]:
        url = f"{self.base_url}/batch"
        query = fields_query(fields, DEFAULT_BATCH_FIELDS)
        logger.info("Querying %d batch IPs with fields: %s", len(ips), query)

        try:
            async with self._client() as client:
                resp = await request_with_retries(
                    client, "POST", url, params={"fields": query}, json=list(ips), policy=self.retry
                )
                resp.raise_for_status()
                return resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error fetching batch data from ip-api: %s", e)
            raise UpstreamUnavailable() from e
