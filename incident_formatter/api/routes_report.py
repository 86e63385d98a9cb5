from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from pydantic import ValidationError

from incident_formatter.api.dependencies import get_formatter, get_registry
from incident_formatter.api.schemas_report import FormatReportRequest, FormatReportResponse
from incident_formatter.core.errors import RAW_TEXT_REQUIRED, ExtractionFault, InputError
from incident_formatter.extraction.engine import ReportFormatter
from incident_formatter.registry.field_registry import (
    FieldRegistry,
    parse_field_config,
    parse_section_config,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["report"])


def _parse_request(payload: Any) -> FormatReportRequest:
    if not isinstance(payload, dict):
        raise InputError(RAW_TEXT_REQUIRED)
    raw_text = payload.get("rawText")
    if not raw_text or not isinstance(raw_text, str):
        raise InputError(RAW_TEXT_REQUIRED)
    try:
        return FormatReportRequest.model_validate(payload)
    except ValidationError as e:
        err = e.errors()[0]
        where = ".".join(str(p) for p in err["loc"])
        raise InputError(f"Invalid request field {where}: {err['msg']}") from e


@router.post("/format-report", response_model=FormatReportResponse)
def format_report_endpoint(
    payload: Any = Body(default=None),
    registry: FieldRegistry = Depends(get_registry),
    formatter: ReportFormatter = Depends(get_formatter),
):
    """
    Formats a raw incident export into the sectioned report.

    customFields / sections overlay the registry for this request only.
    """
    req = _parse_request(payload)

    snapshot = registry.snapshot()
    if req.custom_fields is not None or req.sections is not None:
        snapshot = snapshot.overlay(
            fields=parse_field_config(req.custom_fields) if req.custom_fields is not None else None,
            sections=parse_section_config(req.sections) if req.sections is not None else None,
        )

    try:
        result = formatter.format(req.raw_text, snapshot, req.field_filters)
    except Exception as e:
        # detail stays in the server log
        logger.exception("Error formatting report")
        raise ExtractionFault() from e

    return FormatReportResponse(
        formatted_text=result.formatted_text,
        extracted_fields=result.extracted_fields,
        applied_filters=result.applied_filters.model_dump(by_alias=True, exclude_none=True),
        sections_included=result.sections_included,
    )
