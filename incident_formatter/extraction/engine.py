from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from incident_formatter.extraction.composer import ReportComposer
from incident_formatter.extraction.filters import FilterPipeline
from incident_formatter.extraction.matcher import PatternMatcher
from incident_formatter.extraction.models import (
    FREE_TEXT_SECTIONS,
    GENERAL_SECTION,
    ExtractedField,
    FilterSpec,
)
from incident_formatter.extraction.sections import SectionExtractor
from incident_formatter.registry.field_registry import RegistrySnapshot

# graph/telemetry dumps at the tail of an export; nothing from here on is parsed
CUTOFF_RE = re.compile(r"^[ \t]*(?:Graph|Additional detail)", re.IGNORECASE | re.MULTILINE)


# -----------------------
# Models
# -----------------------

@dataclass(frozen=True)
class FormatResult:
    formatted_text: str
    extracted_fields: Dict[str, ExtractedField] = field(default_factory=dict)
    applied_filters: FilterSpec = field(default_factory=FilterSpec)
    sections_included: List[str] = field(default_factory=list)


# -----------------------
# Helpers
# -----------------------

def apply_cutoff(text: str) -> str:
    m = CUTOFF_RE.search(text)
    return text[: m.start()] if m else text


def _split_by_section(
    extracted: Dict[str, ExtractedField],
    snapshot: RegistrySnapshot,
) -> tuple[Dict[str, ExtractedField], Dict[str, Dict[str, ExtractedField]]]:
    general: Dict[str, ExtractedField] = {}
    custom: Dict[str, Dict[str, ExtractedField]] = {}
    for key, value in extracted.items():
        section = snapshot.fields[key].section
        if section == GENERAL_SECTION:
            general[key] = value
        elif section not in FREE_TEXT_SECTIONS:
            custom.setdefault(section, {})[key] = value
    return general, custom


# -----------------------
# Public API
# -----------------------

class ReportFormatter:
    """cutoff -> field waterfall -> filters -> free-text blocks -> composed report"""

    def __init__(
        self,
        matcher: Optional[PatternMatcher] = None,
        section_extractor: Optional[SectionExtractor] = None,
        composer: Optional[ReportComposer] = None,
    ) -> None:
        self.matcher = matcher or PatternMatcher()
        self.section_extractor = section_extractor or SectionExtractor()
        self.composer = composer or ReportComposer()

    def format(
        self,
        raw_text: str,
        snapshot: RegistrySnapshot,
        filters: Optional[FilterSpec] = None,
    ) -> FormatResult:
        filters = filters or FilterSpec()
        text = apply_cutoff(raw_text)

        extracted = self.matcher.extract(snapshot.fields, text)
        general, custom = _split_by_section(extracted, snapshot)
        general = FilterPipeline(filters).apply(general, snapshot.fields)

        blocks = self.section_extractor.extract(text)
        composed = self.composer.compose(
            general=general,
            custom=custom,
            blocks=blocks,
            sections=snapshot.sections,
        )

        fields_out = dict(general)
        for group in custom.values():
            fields_out.update(group)

        return FormatResult(
            formatted_text=composed.text,
            extracted_fields=fields_out,
            applied_filters=filters,
            sections_included=composed.sections,
        )


def format_report(
    raw_text: str,
    snapshot: RegistrySnapshot,
    filters: Optional[FilterSpec] = None,
) -> FormatResult:
    return ReportFormatter().format(raw_text, snapshot, filters)
