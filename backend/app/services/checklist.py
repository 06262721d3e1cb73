"""Editor checklist derived from SEO and LLM breakdowns.

Turns named sub-scores into pass/fail items with a hint for the writer.
Items are looked up by exact metric name; a metric missing from its
breakdown yields an incomplete item carrying the static hint.
"""

from dataclasses import dataclass
from typing import Any

from app.services.scoring import (
    METRIC_DIRECT_ANSWER,
    METRIC_ENTITY_COVERAGE,
    METRIC_FAQ_SCHEMA,
    METRIC_HEADING_STRUCTURE,
    METRIC_IMAGE_ALT_TEXT,
    METRIC_KEYWORD_DENSITY,
    METRIC_KEYWORD_EARLY,
    METRIC_KEYWORD_IN_H1,
    METRIC_KEYWORD_IN_SLUG,
    METRIC_LINKS,
    METRIC_META_DESCRIPTION,
    METRIC_MIN_LENGTH,
    METRIC_READABILITY,
    METRIC_SHORT_PARAGRAPHS,
    METRIC_STRUCTURED_DATA,
    METRIC_TITLE_NUMBER,
    ScoreBreakdown,
)

DEFAULT_COMPLETION_THRESHOLD = 80

SOURCE_SEO = "seo"
SOURCE_LLM = "llm"

MISSING_KEYWORD_LABEL = "Define a primary keyword"
MISSING_KEYWORD_REQUIREMENT = "Add the target keyword in the SEO settings"


@dataclass(frozen=True)
class ChecklistEntry:
    """Static definition of one checklist line."""

    label: str
    source: str
    metric: str
    hint: str


@dataclass(frozen=True)
class ChecklistItem:
    """A pass/fail line shown to the writer."""

    label: str
    completed: bool
    requirement: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "label": self.label,
            "completed": self.completed,
            "requirement": self.requirement,
        }


CHECKLIST_ENTRIES: tuple[ChecklistEntry, ...] = (
    ChecklistEntry(
        "Keyword in title (H1)",
        SOURCE_SEO,
        METRIC_KEYWORD_IN_H1,
        "Include the keyword in the main title",
    ),
    ChecklistEntry(
        "Keyword in meta description",
        SOURCE_SEO,
        METRIC_META_DESCRIPTION,
        "Include the keyword in the meta description",
    ),
    ChecklistEntry(
        "Keyword in URL (slug)",
        SOURCE_SEO,
        METRIC_KEYWORD_IN_SLUG,
        "Include the keyword in the slug",
    ),
    ChecklistEntry(
        "Keyword in first 10%",
        SOURCE_SEO,
        METRIC_KEYWORD_EARLY,
        "Use the keyword in the opening paragraphs",
    ),
    ChecklistEntry(
        "Keyword density (1-2%)",
        SOURCE_SEO,
        METRIC_KEYWORD_DENSITY,
        "Adjust keyword density to 1-2%",
    ),
    ChecklistEntry(
        "Minimum length (300 words)",
        SOURCE_SEO,
        METRIC_MIN_LENGTH,
        "Write at least 300 words",
    ),
    ChecklistEntry(
        "Correct H1-H5 headings",
        SOURCE_SEO,
        METRIC_HEADING_STRUCTURE,
        "Use one H1, two or more H2 and at least one H3",
    ),
    ChecklistEntry(
        "Short paragraphs (80 words max)",
        SOURCE_SEO,
        METRIC_SHORT_PARAGRAPHS,
        "Keep paragraphs to 80 words or fewer",
    ),
    ChecklistEntry(
        "Image alt text",
        SOURCE_SEO,
        METRIC_IMAGE_ALT_TEXT,
        "Add alternative text to every image",
    ),
    ChecklistEntry(
        "Internal & external links",
        SOURCE_SEO,
        METRIC_LINKS,
        "Link to related internal and external pages",
    ),
    ChecklistEntry(
        "Readability (Flesch-Kincaid)",
        SOURCE_SEO,
        METRIC_READABILITY,
        "Use shorter sentences and simpler words",
    ),
    ChecklistEntry(
        "Entity coverage",
        SOURCE_LLM,
        METRIC_ENTITY_COVERAGE,
        "Mention related people, places and brands",
    ),
    ChecklistEntry(
        "Direct answer (TL;DR)",
        SOURCE_LLM,
        METRIC_DIRECT_ANSWER,
        "Open with a short summary paragraph",
    ),
    ChecklistEntry(
        "Structured data",
        SOURCE_LLM,
        METRIC_STRUCTURED_DATA,
        "Add HowTo or Article JSON-LD",
    ),
    ChecklistEntry(
        "JSON-LD FAQ/Schema",
        SOURCE_SEO,
        METRIC_FAQ_SCHEMA,
        "Add an FAQ section or FAQPage JSON-LD",
    ),
    ChecklistEntry(
        "Number in title",
        SOURCE_SEO,
        METRIC_TITLE_NUMBER,
        "Consider using a number in the H1",
    ),
)


def build_checklist(
    seo: ScoreBreakdown | None,
    llm: ScoreBreakdown | None,
    keyword: str | None,
    threshold: int = DEFAULT_COMPLETION_THRESHOLD,
) -> list[ChecklistItem]:
    """Derive the writer checklist from the two breakdowns.

    Without a keyword the keyword-driven checks are meaningless, so the
    checklist is a single item asking for one.
    """
    if not keyword or not keyword.strip():
        return [
            ChecklistItem(
                label=MISSING_KEYWORD_LABEL,
                completed=False,
                requirement=MISSING_KEYWORD_REQUIREMENT,
            )
        ]

    sources = {
        SOURCE_SEO: seo or ScoreBreakdown(),
        SOURCE_LLM: llm or ScoreBreakdown(),
    }
    items: list[ChecklistItem] = []
    for entry in CHECKLIST_ENTRIES:
        result = sources[entry.source].get(entry.metric)
        if result is None:
            items.append(
                ChecklistItem(label=entry.label, completed=False, requirement=entry.hint)
            )
            continue
        items.append(
            ChecklistItem(
                label=entry.label,
                completed=result.score >= threshold,
                requirement=f"Current score: {result.score}%",
            )
        )
    return items


def checklist_progress(items: list[ChecklistItem]) -> tuple[int, int]:
    """Completed and total item counts."""
    return sum(1 for item in items if item.completed), len(items)
