from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, StrictStr
from pydantic.alias_generators import to_camel

from incident_formatter.extraction.models import ExtractedField, FilterSpec


class FormatReportRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    raw_text: StrictStr
    # per-request overlays; parsed with the same rules as /api/config
    custom_fields: Optional[Dict[str, Any]] = None
    field_filters: Optional[FilterSpec] = None
    sections: Optional[Dict[str, Any]] = None


class FormatReportResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    formatted_text: str
    extracted_fields: Dict[str, ExtractedField]
    applied_filters: Dict[str, Any]
    sections_included: List[str]
