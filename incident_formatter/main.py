from __future__ import annotations

from dotenv import load_dotenv

load_dotenv()

import logging  # noqa: E402
from typing import Optional  # noqa: E402

from fastapi import FastAPI, Request  # noqa: E402
from fastapi.exceptions import RequestValidationError  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402

from incident_formatter.api.routes_config import router as config_router  # noqa: E402
from incident_formatter.api.routes_health import router as health_router  # noqa: E402
from incident_formatter.api.routes_lookup import router as lookup_router  # noqa: E402
from incident_formatter.api.routes_report import router as report_router  # noqa: E402
from incident_formatter.core.config import Settings, settings  # noqa: E402
from incident_formatter.core.errors import GENERIC_SERVER_ERROR, ServiceError  # noqa: E402
from incident_formatter.core.logging_config import configure_logging  # noqa: E402
from incident_formatter.extraction.engine import ReportFormatter  # noqa: E402
from incident_formatter.registry.field_registry import FieldRegistry, build_registry  # noqa: E402

logger = logging.getLogger("incident_formatter")


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"message": "Invalid request body."})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": GENERIC_SERVER_ERROR})


def create_app(
    app_settings: Optional[Settings] = None,
    registry: Optional[FieldRegistry] = None,
) -> FastAPI:
    cfg = app_settings or settings
    configure_logging(cfg.log_level)

    app = FastAPI(title="Incident Report Formatter", version="0.1.0")
    app.state.settings = cfg
    app.state.registry = registry or build_registry(cfg.field_config_file)
    app.state.formatter = ReportFormatter()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("Received request for: %s %s", request.method, request.url.path)
        return await call_next(request)

    _install_error_handlers(app)

    app.include_router(health_router)
    app.include_router(report_router)
    app.include_router(config_router)
    app.include_router(lookup_router)
    return app


app = create_app()
