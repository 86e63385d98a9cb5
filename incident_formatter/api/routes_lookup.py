from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query

from incident_formatter.api.dependencies import get_geolocation_client, get_threat_intel_client
from incident_formatter.clients.geolocation import GeolocationClient
from incident_formatter.clients.threat_intel import ThreatIntelClient
from incident_formatter.core.errors import IPS_REQUIRED, InputError

router = APIRouter(prefix="/api", tags=["lookup"])


@router.get("/ip-info")
async def ip_info_self(
    fields: Optional[str] = Query(default=None),
    geo: GeolocationClient = Depends(get_geolocation_client),
):
    # empty ip: ip-api answers for the caller's own address
    return await geo.lookup("", fields)


@router.get("/ip-info/{ip}")
async def ip_info(
    ip: str,
    fields: Optional[str] = Query(default=None),
    geo: GeolocationClient = Depends(get_geolocation_client),
):
    return await geo.lookup(ip, fields)


@router.post("/ip-info/batch")
async def ip_info_batch(
    payload: Any = Body(default=None),
    geo: GeolocationClient = Depends(get_geolocation_client),
):
    ips = payload.get("ips") if isinstance(payload, dict) else None
    if not ips or not isinstance(ips, list):
        raise InputError(IPS_REQUIRED)
    return await geo.lookup_batch(ips, payload.get("fields"))


@router.get("/threat-intel/{ip}")
async def threat_intel(
    ip: str,
    intel: ThreatIntelClient = Depends(get_threat_intel_client),
):
    return await intel.lookup_reputation(ip)
