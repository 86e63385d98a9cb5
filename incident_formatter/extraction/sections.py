from __future__ import annotations

import re
from typing import Dict, Optional

from incident_formatter.extraction.models import (
    ACTION_RECOMMENDATION_SECTION,
    INCIDENT_INFO_SECTION,
)

# optional emphasis / colon after a header, in any of the forms the exports use
_HEADER_TAIL = r"[ \t]*(?:\*\*)?[ \t]*:?[ \t]*(?:\*\*)?"

INCIDENT_INFO_RE = re.compile(
    r"Incident Information" + _HEADER_TAIL
    + r"\s*([\s\S]*?)\s*(?=(?:\*\*)?(?:Event Time|Action & Recommendation)|\Z)"
)
INCIDENT_DETAIL_RE = re.compile(r"(?:\*\*)?Incident Detail(?:\*\*)?:(?:\*\*)?")
ACTION_RECOMMENDATION_RE = re.compile(r"Action & Recommendation" + _HEADER_TAIL + r"\s*([\s\S]*)")
BLANK_LINES_RE = re.compile(r"\n\s*\n")


class SectionExtractor:
    """Pulls the two free-text blocks out of a report."""

    def incident_information(self, text: str) -> Optional[str]:
        m = INCIDENT_INFO_RE.search(text)
        if not m or not m.group(1).strip():
            return None
        content = INCIDENT_DETAIL_RE.sub("", m.group(1), count=1).strip()
        return content or None

    def action_recommendation(self, text: str) -> Optional[str]:
        m = ACTION_RECOMMENDATION_RE.search(text)
        if not m:
            return None
        content = m.group(1).strip()
        if not content:
            return None
        return BLANK_LINES_RE.sub("\n", content)

    def extract(self, text: str) -> Dict[str, str]:
        blocks = {
            INCIDENT_INFO_SECTION: self.incident_information(text),
            ACTION_RECOMMENDATION_SECTION: self.action_recommendation(text),
        }
        return {k: v for k, v in blocks.items() if v}
