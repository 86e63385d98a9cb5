from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence

from incident_formatter.extraction.models import ExtractedField, FieldDefinition
from incident_formatter.extraction.strategies import DEFAULT_STRATEGIES, MatchStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldMatch:
    value: str
    keyword: str
    strategy: str


class PatternMatcher:
    """
    Waterfall matcher: keywords in declared order, and for each keyword the
    strategies in order. The first non-empty value wins.
    """

    def __init__(self, strategies: Sequence[MatchStrategy] = DEFAULT_STRATEGIES) -> None:
        self.strategies = tuple(strategies)

    def find(self, field: FieldDefinition, text: str) -> Optional[FieldMatch]:
        for keyword in field.keyword_list():
            for strategy in self.strategies:
                value = strategy.match(keyword, text)
                if value:
                    return FieldMatch(value=value, keyword=keyword, strategy=strategy.name)
        return None

    def extract(self, fields: Mapping[str, FieldDefinition], text: str) -> Dict[str, ExtractedField]:
        """Run every enabled field; unmatched fields are left out of the result."""
        out: Dict[str, ExtractedField] = {}
        for key, field in fields.items():
            if not field.enabled:
                continue
            found = self.find(field, text)
            if found is None:
                continue
            logger.debug("field %s matched via %s (%r)", key, found.strategy, found.keyword)
            out[key] = ExtractedField(label=field.display_label(key), value=found.value)
        return out
