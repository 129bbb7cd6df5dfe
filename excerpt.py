from __future__ import annotations
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterable, NamedTuple

from errors import ExcerptRuleError

log = logging.getLogger(__name__)

CONTENT_FIELD = "rendered_content"


class MarkerRule(NamedTuple):
    start: str
    end: str


class ExcerptStatus(Enum):
    FOUND = "found"
    NO_MATCH = "no_match"
    NOT_EXTRACTABLE = "not_extractable"


class ExcerptResult(NamedTuple):
    status: ExcerptStatus
    text: str | None = None


# Explicit markers first, first paragraph as the fallback
DEFAULT_RULES: tuple[MarkerRule, ...] = (
    MarkerRule("<!-- Excerpt Start -->", "<!-- Excerpt End -->"),
    MarkerRule("<p>", "</p>"),
)


def _as_rule(i: int, raw: Any) -> MarkerRule:
    if isinstance(raw, Mapping):
        if set(raw) != {"start", "end"}:
            raise ExcerptRuleError(f"excerpt rule #{i}: expected keys 'start' and 'end', got {sorted(raw)}")
        start, end = raw["start"], raw["end"]
    elif isinstance(raw, (list, tuple)) and len(raw) == 2:
        start, end = raw
    else:
        raise ExcerptRuleError(f"excerpt rule #{i}: expected a start/end pair, got {raw!r}")
    for name, marker in (("start", start), ("end", end)):
        if not isinstance(marker, str) or not marker:
            raise ExcerptRuleError(f"excerpt rule #{i}: '{name}' must be a non-empty string")
    return MarkerRule(start, end)


def build_rules(raw: Iterable[Any]) -> tuple[MarkerRule, ...]:
    """Validate configured marker pairs once, at load time."""
    if not isinstance(raw, (list, tuple)):
        raise ExcerptRuleError("excerpt rules must be a list of start/end pairs")
    rules = tuple(_as_rule(i, r) for i, r in enumerate(raw, 1))
    if not rules:
        raise ExcerptRuleError("at least one excerpt rule is required")
    return rules


def _rendered_content(document: Any) -> str | None:
    if isinstance(document, Mapping):
        content = document.get(CONTENT_FIELD)
    else:
        content = getattr(document, CONTENT_FIELD, None)
    return content if isinstance(content, str) else None


def find_excerpt(document: Any, rules: Iterable[MarkerRule] = DEFAULT_RULES) -> ExcerptResult:
    """
    Try each marker pair in order and return the first bounded region.
    The end marker is only searched for after the start marker.
    """
    content = _rendered_content(document)
    if content is None:
        log.warning('Failed to extract excerpt: document has no "%s" field.', CONTENT_FIELD)
        return ExcerptResult(ExcerptStatus.NOT_EXTRACTABLE)

    for start, end in rules:
        start_pos = content.find(start)
        if start_pos == -1:
            continue
        body_pos = start_pos + len(start)
        end_pos = content.find(end, body_pos)
        if end_pos == -1:
            continue
        return ExcerptResult(ExcerptStatus.FOUND, content[body_pos:end_pos].strip())

    return ExcerptResult(ExcerptStatus.NO_MATCH)


def extract_excerpt(document: Any, rules: Iterable[MarkerRule] = DEFAULT_RULES) -> str | None:
    return find_excerpt(document, rules).text
