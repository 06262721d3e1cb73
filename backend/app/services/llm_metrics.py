"""Answer-engine (LLM) readiness heuristics.

Despite the name, nothing here calls a model: these are deterministic
checks for traits that make an article easy for answer engines to quote,
namely named entities, an up-front direct answer and schema.org markup.
"""

import re
from collections.abc import Iterable

from app.utils.html_text import (
    extract_json_ld,
    first_paragraph_text,
    json_ld_types,
    strip_tags,
)
from app.utils.score_math import clamp_score

# Two or more consecutive Capitalized words, e.g. "New York City"
ENTITY_PATTERN = re.compile(r"[A-Z][a-z]+(?:\s+[A-Z][a-z]+)+")

ENTITY_TARGET_COUNT = 5
DIRECT_ANSWER_MIN_CHARS = 100
DEFAULT_STRUCTURED_DATA_TYPES: tuple[str, ...] = ("HowTo", "Article")


def count_entities(content: str | None) -> int:
    """Number of distinct multi-word capitalized phrases in the plain text."""
    if not content:
        return 0
    text = strip_tags(content)
    return len({match.strip() for match in ENTITY_PATTERN.findall(text)})


def entity_coverage_score(entity_count: int) -> int:
    """Five or more distinct entities score 100, linear below."""
    return clamp_score(min(100.0, entity_count / ENTITY_TARGET_COUNT * 100))


def has_direct_answer(content: str | None) -> bool:
    """Whether the first paragraph is a substantive (100+ char) answer."""
    text = first_paragraph_text(content)
    if text is None:
        return False
    return len(text) >= DIRECT_ANSWER_MIN_CHARS


def has_structured_data(
    content: str | None,
    types: Iterable[str] = DEFAULT_STRUCTURED_DATA_TYPES,
) -> bool:
    """Whether the JSON-LD block declares one of the allowed @type values."""
    data = extract_json_ld(content)
    if data is None:
        return False
    return not json_ld_types(data).isdisjoint(types)
