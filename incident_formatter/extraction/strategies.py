"""
Value-extraction strategies for a single "Keyword : value" field.

Each strategy is tried with one keyword at a time. Keywords are escaped and
matched case-insensitively; the ``**`` emphasis marker is matched literally.
A strategy returns the trimmed value of the first occurrence it finds, or None
when it does not match or the value is blank.
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Optional, Protocol, Tuple

_BLANK_RUN = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)+")
# a line that opens another emphasized label, e.g. "**Owner:**" or "**Owner**:"
_LABEL_LINE = r"[ \t]*\*\*[^\n*]+?(?::|\*\*[ \t]*:)"


class MatchStrategy(Protocol):
    name: str

    def match(self, keyword: str, text: str) -> Optional[str]:
        ...


@lru_cache(maxsize=2048)
def _compile(template: str, keyword: str, flags: int) -> re.Pattern[str]:
    return re.compile(template.replace("{kw}", re.escape(keyword.strip())), flags)


def _drop_closing_marker(value: str) -> str:
    value = value.strip()
    return value[:-2].rstrip() if value.endswith("**") else value


class RegexStrategy:
    name: str = "regex"
    template: str = ""
    flags: int = re.IGNORECASE | re.MULTILINE

    def pattern(self, keyword: str) -> re.Pattern[str]:
        return _compile(self.template, keyword, self.flags)

    def postprocess(self, value: str) -> str:
        return value.strip()

    def match(self, keyword: str, text: str) -> Optional[str]:
        m = self.pattern(keyword).search(text)
        if not m:
            return None
        value = self.postprocess(m.group(1))
        return value or None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class EmphasisStrategy(RegexStrategy):
    """Label wrapped in ``**``; a literal closing ``**`` after the value is dropped."""

    def postprocess(self, value: str) -> str:
        return _drop_closing_marker(value)


class Tabular(RegexStrategy):
    # label at line start or after a tab; value runs to the next "\tLabel :" or end of text
    name = "tabular"
    template = r"(?:^|\t)[ \t]*{kw}[ \t]*:[ \t]*([^\t\n]*?)[ \t]*(?=\t+[^\t\n:]+:|\s*\Z)"


class EmphasisSameLine(EmphasisStrategy):
    name = "emphasis_same_line"
    template = r"\*\*[ \t]*{kw}[ \t]*:[ \t]*(?:\*\*)?[ \t]*([^\n]*?)[ \t]*(?:\*\*)?[ \t]*$"


class EmphasisNextLine(EmphasisStrategy):
    name = "emphasis_next_line"
    template = r"\*\*[ \t]*{kw}[ \t]*:[ \t]*(?:\*\*)?[ \t]*\n(?!" + _LABEL_LINE + r")[ \t]*([^\n]*?)[ \t]*$"


class EmphasisSameLineClosed(EmphasisStrategy):
    name = "emphasis_same_line_closed"
    template = r"\*\*[ \t]*{kw}[ \t]*(?::[ \t]*\*\*|\*\*[ \t]*:)[ \t]*([^\n]*?)[ \t]*$"


class EmphasisNextLineClosed(EmphasisStrategy):
    name = "emphasis_next_line_closed"
    template = r"\*\*[ \t]*{kw}[ \t]*(?::[ \t]*\*\*|\*\*[ \t]*:)[ \t]*\n(?!" + _LABEL_LINE + r")[ \t]*([^\n]*?)[ \t]*$"


class SimpleLine(RegexStrategy):
    name = "simple_line"
    template = r"^[ \t]*{kw}[ \t]*:[ \t]*(.*?)[ \t]*$"


class GenericFallback(RegexStrategy):
    # stops at the next "Word(s) :" label on the same line
    name = "generic_fallback"
    template = r"{kw}[ \t]*:[ \t]*(?:\*\*)?[ \t]*(.*?)(?=[ \t]+[A-Za-z][A-Za-z ]*:|$)"


class MultiLineBlock(EmphasisStrategy):
    name = "multi_line_block"
    template = (
        r"\*\*[ \t]*{kw}[ \t]*(?::[ \t]*(?:\*\*)?|\*\*[ \t]*:)"
        r"[ \t]*([\s\S]*?)"
        r"(?=\n" + _LABEL_LINE + r"|\Z)"
    )
    flags = re.IGNORECASE

    def postprocess(self, value: str) -> str:
        return super().postprocess(_BLANK_RUN.sub("\n\n", value))


# Most specific first.
DEFAULT_STRATEGIES: Tuple[MatchStrategy, ...] = (
    Tabular(),
    EmphasisSameLine(),
    EmphasisNextLine(),
    EmphasisSameLineClosed(),
    EmphasisNextLineClosed(),
    SimpleLine(),
    GenericFallback(),
    MultiLineBlock(),
)
