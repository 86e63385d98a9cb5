import pytest
from fastapi.testclient import TestClient

from incident_formatter.core.config import Settings
from incident_formatter.main import create_app
from incident_formatter.registry.field_registry import FieldRegistry


@pytest.fixture
def registry():
    return FieldRegistry()


@pytest.fixture
def app(registry):
    cfg = Settings(_env_file=None, abuseipdb_api_key=None, field_config_file=None)
    return create_app(cfg, registry=registry)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
