from __future__ import annotations

# Built-in registry. Callers overlay or replace entries through /api/config.
DEFAULT_FIELD_CONFIG: dict[str, dict] = {
    "category": {
        "keywords": ["Category"],
        "section": "general",
        "label": "Category",
        "enabled": True,
        "priority": 1,
    },
    "subCategories": {
        "keywords": ["Sub Categories", "Sub Category"],
        "section": "general",
        "label": "Sub Categories",
        "enabled": True,
        "priority": 2,
    },
    "deviceAction": {
        "keywords": ["Device Action"],
        "section": "general",
        "label": "Device Action",
        "enabled": True,
        "priority": 3,
    },
    "severity": {
        "keywords": ["Severity", "Priority"],
        "section": "general",
        "label": "Severity",
        "enabled": True,
        "priority": 4,
    },
    "dateOfIssue": {
        "keywords": ["Date of Issue", "Issue Date"],
        "section": "general",
        "label": "Date of Issue",
        "enabled": True,
        "priority": 5,
    },
    "startTime": {
        "keywords": ["Start Time"],
        "section": "general",
        "label": "Start Time",
        "enabled": True,
        "priority": 6,
    },
    "endTime": {
        "keywords": ["End Time"],
        "section": "general",
        "label": "End Time",
        "enabled": True,
        "priority": 7,
    },
    "destinationPort": {
        "keywords": ["Destination Port", "Dst Port"],
        "section": "general",
        "label": "Destination Port",
        "enabled": True,
        "priority": 8,
    },
    "sourceIp": {
        "keywords": ["Source IP", "Src IP"],
        "section": "general",
        "label": "Source IP",
        "enabled": True,
        "priority": 9,
    },
    "destinationIp": {
        "keywords": ["Destination IP", "Dst IP"],
        "section": "general",
        "label": "Destination IP",
        "enabled": True,
        "priority": 10,
    },
    "hostname": {
        "keywords": ["Hostname", "Host Name"],
        "section": "general",
        "label": "Hostname",
        "enabled": True,
        "priority": 11,
    },
    "username": {
        "keywords": ["Username", "User Name"],
        "section": "general",
        "label": "Username",
        "enabled": True,
        "priority": 12,
    },
}

DEFAULT_SECTION_CONFIG: dict[str, dict] = {
    "general": {"enabled": True, "label": "Incident General Information"},
    "incidentInfo": {"enabled": True, "label": "Incident Information"},
    "actionRecommendation": {"enabled": True, "label": "Action & Recommendation"},
}

# Rendering order for the general block; matched fields outside this list follow it.
CANONICAL_GENERAL_ORDER: tuple[str, ...] = (
    "category",
    "subCategories",
    "deviceAction",
    "severity",
    "dateOfIssue",
    "startTime",
    "endTime",
    "destinationPort",
)
