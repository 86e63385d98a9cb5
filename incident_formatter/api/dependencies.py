from __future__ import annotations

from fastapi import Request

from incident_formatter.clients.geolocation import GeolocationClient
from incident_formatter.clients.http import RetryPolicy
from incident_formatter.clients.threat_intel import ThreatIntelClient
from incident_formatter.core.config import Settings
from incident_formatter.extraction.engine import ReportFormatter
from incident_formatter.registry.field_registry import FieldRegistry


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registry(request: Request) -> FieldRegistry:
    return request.app.state.registry


def get_formatter(request: Request) -> ReportFormatter:
    return request.app.state.formatter


def get_geolocation_client(request: Request) -> GeolocationClient:
    cfg = get_settings(request)
    return GeolocationClient(
        cfg.ip_api_base_url,
        timeout_s=cfg.http_timeout_s,
        retry=RetryPolicy(max_retries=cfg.http_max_retries),
    )


def get_threat_intel_client(request: Request) -> ThreatIntelClient:
    cfg = get_settings(request)
    return ThreatIntelClient(
        cfg.abuseipdb_base_url,
        cfg.abuseipdb_api_key,
        max_age_days=cfg.abuseipdb_max_age_days,
        timeout_s=cfg.http_timeout_s,
        retry=RetryPolicy(max_retries=cfg.http_max_retries),
    )
