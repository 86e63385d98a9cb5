from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

GENERAL_SECTION = "general"
INCIDENT_INFO_SECTION = "incidentInfo"
ACTION_RECOMMENDATION_SECTION = "actionRecommendation"

FREE_TEXT_SECTIONS = (INCIDENT_INFO_SECTION, ACTION_RECOMMENDATION_SECTION)
BUILTIN_SECTIONS = (GENERAL_SECTION,) + FREE_TEXT_SECTIONS


class FieldDefinition(BaseModel):
    # keywords/priority are stored as submitted; bad values just never match or rank
    model_config = ConfigDict(extra="allow", frozen=True)

    keywords: Any = Field(default_factory=list)
    section: str = GENERAL_SECTION
    label: Optional[str] = None
    enabled: bool = True
    priority: Any = None

    def keyword_list(self) -> List[str]:
        if not isinstance(self.keywords, (list, tuple)):
            return []
        return [k for k in self.keywords if isinstance(k, str) and k.strip()]

    def rank(self) -> Optional[int]:
        p = self.priority
        if isinstance(p, bool) or not isinstance(p, int):
            return None
        return p

    def display_label(self, key: str) -> str:
        return self.label if isinstance(self.label, str) and self.label.strip() else key


class SectionDefinition(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    enabled: bool = True
    label: Optional[str] = None

    def display_label(self, key: str) -> str:
        return self.label if isinstance(self.label, str) and self.label.strip() else key


class ExtractedField(BaseModel):
    label: str
    value: str


class FilterSpec(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    include_fields: Optional[List[str]] = None
    exclude_fields: Optional[List[str]] = None
    include_only: Optional[List[str]] = None
    max_fields: Optional[int] = Field(default=None, ge=0)

    def is_empty(self) -> bool:
        return (
            self.include_fields is None
            and self.exclude_fields is None
            and self.include_only is None
            and self.max_fields is None
        )
