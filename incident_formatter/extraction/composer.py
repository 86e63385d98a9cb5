from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence

from incident_formatter.extraction.defaults import CANONICAL_GENERAL_ORDER, DEFAULT_SECTION_CONFIG
from incident_formatter.extraction.models import (
    ACTION_RECOMMENDATION_SECTION,
    BUILTIN_SECTIONS,
    GENERAL_SECTION,
    INCIDENT_INFO_SECTION,
    ExtractedField,
    SectionDefinition,
)

HEADER_INDENT = "    "


@dataclass(frozen=True)
class ComposedReport:
    text: str
    sections: List[str] = field(default_factory=list)


def _section(sections: Mapping[str, SectionDefinition], key: str) -> SectionDefinition:
    found = sections.get(key)
    if found is not None:
        return found
    return SectionDefinition.model_validate(DEFAULT_SECTION_CONFIG.get(key, {}))


def _field_lines(extracted: Mapping[str, ExtractedField]) -> str:
    return "".join(f"{f.label} : {f.value}\n" for f in extracted.values())


class ReportComposer:
    def __init__(self, canonical_order: Sequence[str] = CANONICAL_GENERAL_ORDER) -> None:
        self.canonical_order = tuple(canonical_order)

    def order_general(self, extracted: Mapping[str, ExtractedField]) -> Dict[str, ExtractedField]:
        ordered = {k: extracted[k] for k in self.canonical_order if k in extracted}
        ordered.update((k, v) for k, v in extracted.items() if k not in ordered)
        return ordered

    def compose(
        self,
        *,
        general: Mapping[str, ExtractedField],
        custom: Mapping[str, Mapping[str, ExtractedField]],
        blocks: Mapping[str, str],
        sections: Mapping[str, SectionDefinition],
    ) -> ComposedReport:
        text = ""
        included: List[str] = []

        general_def = _section(sections, GENERAL_SECTION)
        if general and general_def.enabled:
            text += f"{HEADER_INDENT}{general_def.display_label(GENERAL_SECTION)}\n"
            text += _field_lines(self.order_general(general))
            included.append(GENERAL_SECTION)

        for key, definition in sections.items():
            if key in BUILTIN_SECTIONS or not definition.enabled:
                continue
            fields = custom.get(key)
            if not fields:
                continue
            text += f"\n{HEADER_INDENT}{definition.display_label(key)}\n"
            text += _field_lines(fields)
            included.append(key)

        for key in (INCIDENT_INFO_SECTION, ACTION_RECOMMENDATION_SECTION):
            content = blocks.get(key)
            definition = _section(sections, key)
            if not content or not definition.enabled:
                continue
            text += f"\n{HEADER_INDENT}{definition.display_label(key)}\n{content}\n"
            included.append(key)

        return ComposedReport(text=text.rstrip(), sections=included)
