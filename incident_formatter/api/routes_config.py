from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from incident_formatter.api.dependencies import get_registry
from incident_formatter.api.schemas_config import ConfigResponse
from incident_formatter.core.errors import CONFIG_PAYLOAD_REQUIRED, InputError
from incident_formatter.registry.field_registry import FieldRegistry

router = APIRouter(prefix="/api/config", tags=["config"])


@router.get("", response_model=ConfigResponse)
def read_config(registry: FieldRegistry = Depends(get_registry)):
    return registry.snapshot().to_payload()


@router.post("", response_model=ConfigResponse)
def update_config(
    payload: Any = Body(default=None),
    registry: FieldRegistry = Depends(get_registry),
):
    """Shallow merge: each submitted field/section replaces the stored one whole."""
    if not isinstance(payload, dict):
        raise InputError(CONFIG_PAYLOAD_REQUIRED)

    field_config = payload.get("fieldConfig")
    section_config = payload.get("sectionConfig")
    if field_config is None and section_config is None:
        raise InputError(CONFIG_PAYLOAD_REQUIRED)

    snapshot = registry.merge(field_config=field_config, section_config=section_config)
    return snapshot.to_payload()
