from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from incident_formatter.extraction.models import ExtractedField, FieldDefinition, FilterSpec

Extracted = Dict[str, ExtractedField]


def _include_fields(extracted: Extracted, keys: List[str]) -> Extracted:
    allowed = set(keys)
    return {k: v for k, v in extracted.items() if k in allowed}


def _exclude_fields(extracted: Extracted, keys: List[str]) -> Extracted:
    denied = set(keys)
    return {k: v for k, v in extracted.items() if k not in denied}


def _include_only(extracted: Extracted, keywords: List[str]) -> Extracted:
    needles = [k.lower() for k in keywords if isinstance(k, str) and k.strip()]
    if not needles:
        return extracted

    def hit(f: ExtractedField) -> bool:
        hay = f"{f.label}\n{f.value}".lower()
        return any(n in hay for n in needles)

    return {k: v for k, v in extracted.items() if hit(v)}


def _cap(extracted: Extracted, fields: Mapping[str, FieldDefinition], limit: int) -> Extracted:
    def sort_key(key: str):
        definition = fields.get(key)
        rank = definition.rank() if definition is not None else None
        return (rank is None, rank if rank is not None else 0)

    # sorted() is stable: equal priorities keep discovery order
    keep = sorted(extracted, key=sort_key)[:limit]
    return {k: extracted[k] for k in keep}


@dataclass(frozen=True)
class FilterPipeline:
    spec: FilterSpec = field(default_factory=FilterSpec)

    def apply(self, extracted: Extracted, fields: Mapping[str, FieldDefinition]) -> Extracted:
        out = dict(extracted)
        s = self.spec
        if s.include_fields:
            out = _include_fields(out, s.include_fields)
        if s.exclude_fields:
            out = _exclude_fields(out, s.exclude_fields)
        if s.include_only:
            out = _include_only(out, s.include_only)
        if s.max_fields is not None:
            out = _cap(out, fields, s.max_fields)
        return out
