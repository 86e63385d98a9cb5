from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from incident_formatter.core.errors import InputError
from incident_formatter.extraction.defaults import DEFAULT_FIELD_CONFIG, DEFAULT_SECTION_CONFIG
from incident_formatter.extraction.models import FieldDefinition, SectionDefinition

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _parse_definitions(raw: Any, model: Type[M], name: str) -> Dict[str, M]:
    # structural checks only: an object of objects
    if not isinstance(raw, dict):
        raise InputError(f'"{name}" must be an object keyed by id.')
    out: Dict[str, M] = {}
    for key, value in raw.items():
        if not isinstance(value, dict):
            raise InputError(f'"{name}.{key}" must be an object.')
        try:
            out[str(key)] = model.model_validate(value)
        except ValidationError as e:
            raise InputError(f'"{name}.{key}" is malformed: {e.errors()[0]["msg"]}') from e
    return out


def parse_field_config(raw: Any) -> Dict[str, FieldDefinition]:
    return _parse_definitions(raw, FieldDefinition, "fieldConfig")


def parse_section_config(raw: Any) -> Dict[str, SectionDefinition]:
    return _parse_definitions(raw, SectionDefinition, "sectionConfig")


@dataclass(frozen=True)
class RegistrySnapshot:
    fields: Mapping[str, FieldDefinition]
    sections: Mapping[str, SectionDefinition]

    @classmethod
    def build(
        cls,
        fields: Mapping[str, FieldDefinition],
        sections: Mapping[str, SectionDefinition],
    ) -> "RegistrySnapshot":
        return cls(fields=MappingProxyType(dict(fields)), sections=MappingProxyType(dict(sections)))

    def overlay(
        self,
        *,
        fields: Optional[Mapping[str, FieldDefinition]] = None,
        sections: Optional[Mapping[str, SectionDefinition]] = None,
    ) -> "RegistrySnapshot":
        """Shallow merge: a submitted key replaces the whole previous definition."""
        return RegistrySnapshot.build(
            {**self.fields, **(fields or {})},
            {**self.sections, **(sections or {})},
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "fieldConfig": {k: v.model_dump() for k, v in self.fields.items()},
            "sectionConfig": {k: v.model_dump() for k, v in self.sections.items()},
        }


class FieldRegistry:
    """
    Field/section configuration owned by one service instance.

    Readers take ``snapshot()`` once per request and never see a half-applied
    update: ``merge`` builds a new snapshot and swaps the reference.
    """

    def __init__(
        self,
        field_config: Optional[Mapping[str, Any]] = None,
        section_config: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._lock = threading.Lock()
        self._snapshot = RegistrySnapshot.build(
            parse_field_config(dict(DEFAULT_FIELD_CONFIG if field_config is None else field_config)),
            parse_section_config(dict(DEFAULT_SECTION_CONFIG if section_config is None else section_config)),
        )

    def snapshot(self) -> RegistrySnapshot:
        return self._snapshot

    def merge(
        self,
        *,
        field_config: Optional[Any] = None,
        section_config: Optional[Any] = None,
    ) -> RegistrySnapshot:
        fields = parse_field_config(field_config) if field_config is not None else None
        sections = parse_section_config(section_config) if section_config is not None else None
        # writers serialize so concurrent merges do not drop each other's keys
        with self._lock:
            self._snapshot = self._snapshot.overlay(fields=fields, sections=sections)
            snap = self._snapshot
        logger.info(
            "registry updated: fields=%s sections=%s",
            sorted(fields or {}),
            sorted(sections or {}),
        )
        return snap


def load_overlay(path: str | Path) -> Dict[str, Any]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object with fieldConfig/sectionConfig")
    return data


def build_registry(field_config_file: Optional[str] = None) -> FieldRegistry:
    reg = FieldRegistry()
    if field_config_file:
        overlay = load_overlay(field_config_file)
        reg.merge(
            field_config=overlay.get("fieldConfig"),
            section_config=overlay.get("sectionConfig"),
        )
        logger.info("loaded registry overlay from %s", field_config_file)
    return reg
