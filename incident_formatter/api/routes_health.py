from fastapi import APIRouter, Depends

from incident_formatter.api.dependencies import get_registry
from incident_formatter.registry.field_registry import FieldRegistry

router = APIRouter(tags=["health"])

@router.get("/")
def root():
    return {"service": "incident-formatter", "version": "0.1.0"}

@router.get("/health")
def health():
    return {"status": "ok"}

@router.get("/ready")
def ready(registry: FieldRegistry = Depends(get_registry)):
    return {"ready": bool(registry.snapshot().fields)}
