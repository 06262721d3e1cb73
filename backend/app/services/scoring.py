"""SEO and LLM score aggregation.

Runs every metric evaluator in a fixed order and reduces the sub-scores to
a composite 0-100 score. The metric names below are a contract: the
checklist and API clients look breakdown entries up by exact name.

Aggregation performs no error handling of its own. Evaluators guarantee a
bounded result for any input, including None and malformed HTML.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from app.services import llm_metrics, seo_metrics
from app.utils.score_math import bool_score, clamp_score, round_half_up

# SEO metric names, in evaluation order
METRIC_KEYWORD_DENSITY = "Keyword density"
METRIC_KEYWORD_IN_H1 = "Keyword in H1"
METRIC_HEADING_STRUCTURE = "Heading structure"
METRIC_META_DESCRIPTION = "Meta description"
METRIC_KEYWORD_IN_SLUG = "Keyword in slug"
METRIC_PARAGRAPH_LENGTH = "Paragraph length"
METRIC_IMAGE_ALT_TEXT = "Image alt text"
METRIC_LINKS = "Links"
METRIC_READABILITY = "Readability"
METRIC_KEYWORD_EARLY = "Keyword in first 10%"
METRIC_MIN_LENGTH = "Minimum length"
METRIC_FAQ_SCHEMA = "FAQ/Schema presence"
METRIC_TITLE_NUMBER = "Title has number"
METRIC_SHORT_PARAGRAPHS = "Short paragraphs"

# LLM metric names, in evaluation order
METRIC_ENTITY_COVERAGE = "Semantic entity coverage"
METRIC_DIRECT_ANSWER = "Direct answer (TL;DR)"
METRIC_STRUCTURED_DATA = "Structured data (other schemas)"

SEO_METRICS: tuple[str, ...] = (
    METRIC_KEYWORD_DENSITY,
    METRIC_KEYWORD_IN_H1,
    METRIC_HEADING_STRUCTURE,
    METRIC_META_DESCRIPTION,
    METRIC_KEYWORD_IN_SLUG,
    METRIC_PARAGRAPH_LENGTH,
    METRIC_IMAGE_ALT_TEXT,
    METRIC_LINKS,
    METRIC_READABILITY,
    METRIC_KEYWORD_EARLY,
    METRIC_MIN_LENGTH,
    METRIC_FAQ_SCHEMA,
    METRIC_TITLE_NUMBER,
    METRIC_SHORT_PARAGRAPHS,
)

LLM_METRICS: tuple[str, ...] = (
    METRIC_ENTITY_COVERAGE,
    METRIC_DIRECT_ANSWER,
    METRIC_STRUCTURED_DATA,
)

# Uniform weights; a non-uniform weighting only needs new values here
SEO_WEIGHTS: dict[str, float] = {name: 1.0 for name in SEO_METRICS}
LLM_WEIGHTS: dict[str, float] = {name: 1.0 for name in LLM_METRICS}

LLM_STRUCTURED_DATA_TYPES: tuple[str, ...] = ("HowTo", "Article")

SCORE_BAND_GOOD = 80
SCORE_BAND_WARNING = 60


@dataclass(frozen=True)
class MetricResult:
    """One named sub-score of a breakdown.

    Attributes:
        metric: Metric name, unique within a breakdown
        score: Integer sub-score, clamped to 0-100
        weight: Positive weight (1.0 for every current metric)
    """

    metric: str
    score: int
    weight: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "score", clamp_score(self.score))
        if self.weight <= 0:
            raise ValueError(f"Metric weight must be positive: {self.weight}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"metric": self.metric, "score": self.score, "weight": self.weight}


@dataclass(frozen=True)
class ScoreBreakdown:
    """Composite score with its ordered sub-scores."""

    total_score: int = 0
    breakdown: list[MetricResult] = field(default_factory=list)

    @classmethod
    def from_results(cls, results: Iterable[MetricResult]) -> "ScoreBreakdown":
        """Build a breakdown whose total is the rounded mean of the scores."""
        items = list(results)
        if not items:
            return cls()
        total = round_half_up(sum(item.score for item in items) / len(items))
        return cls(total_score=total, breakdown=items)

    def get(self, metric: str) -> MetricResult | None:
        """Look up a sub-score by metric name."""
        for item in self.breakdown:
            if item.metric == metric:
                return item
        return None

    def weighted_total(self) -> int:
        """Weight-aware mean; equals total_score while all weights are 1."""
        weight_sum = sum(item.weight for item in self.breakdown)
        if weight_sum <= 0:
            return 0
        weighted = sum(item.score * item.weight for item in self.breakdown)
        return clamp_score(weighted / weight_sum)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "total_score": self.total_score,
            "breakdown": [item.to_dict() for item in self.breakdown],
        }


def score_band(score: int) -> str:
    """Traffic-light band for a 0-100 score: good, warning or poor."""
    if score >= SCORE_BAND_GOOD:
        return "good"
    if score >= SCORE_BAND_WARNING:
        return "warning"
    return "poor"


def calculate_seo_score(
    content: str | None,
    keyword: str | None,
    meta_description: str | None,
    slug: str | None,
    site_hosts: Iterable[str] | None = None,
    min_words: int = seo_metrics.DEFAULT_MIN_WORDS,
    max_paragraph_words: int = seo_metrics.DEFAULT_MAX_PARAGRAPH_WORDS,
) -> ScoreBreakdown:
    """Run the 14 SEO evaluators and average their scores.

    Args:
        content: Article body HTML
        keyword: Primary target keyword
        meta_description: SEO meta description
        slug: URL slug
        site_hosts: The site's own hostnames for internal-link detection
        min_words: Minimum article length
        max_paragraph_words: Word limit for the short-paragraph check

    Returns:
        ScoreBreakdown with one entry per metric in SEO_METRICS order
    """
    density = seo_metrics.calculate_keyword_density(content, keyword)
    headings = seo_metrics.count_headings(content)

    scores = {
        METRIC_KEYWORD_DENSITY: seo_metrics.keyword_density_score(density),
        METRIC_KEYWORD_IN_H1: bool_score(
            seo_metrics.has_keyword_in_h1(content, keyword)
        ),
        METRIC_HEADING_STRUCTURE: seo_metrics.evaluate_heading_structure(
            headings
        ).score,
        METRIC_META_DESCRIPTION: seo_metrics.validate_meta_description(
            meta_description, keyword
        ).score,
        METRIC_KEYWORD_IN_SLUG: bool_score(
            seo_metrics.check_keyword_in_slug(slug, keyword)
        ),
        METRIC_PARAGRAPH_LENGTH: seo_metrics.evaluate_paragraphs(content).score,
        METRIC_IMAGE_ALT_TEXT: seo_metrics.check_image_alts(content, keyword).score,
        METRIC_LINKS: seo_metrics.count_links(content, site_hosts).score,
        METRIC_READABILITY: seo_metrics.calculate_readability(content),
        METRIC_KEYWORD_EARLY: bool_score(
            seo_metrics.check_keyword_early(content, keyword)
        ),
        METRIC_MIN_LENGTH: bool_score(
            seo_metrics.check_min_length(content, min_words)
        ),
        METRIC_FAQ_SCHEMA: bool_score(seo_metrics.has_faq_schema(content)),
        METRIC_TITLE_NUMBER: bool_score(seo_metrics.title_has_number(content)),
        METRIC_SHORT_PARAGRAPHS: bool_score(
            seo_metrics.check_short_paragraphs(content, max_paragraph_words)
        ),
    }

    return ScoreBreakdown.from_results(
        MetricResult(metric=name, score=scores[name], weight=SEO_WEIGHTS[name])
        for name in SEO_METRICS
    )


def calculate_llm_score(content: str | None, keyword: str | None) -> ScoreBreakdown:
    """Run the 3 answer-engine evaluators and average their scores.

    ``keyword`` is accepted for signature parity with calculate_seo_score;
    none of the current LLM heuristics depend on it.
    """
    scores = {
        METRIC_ENTITY_COVERAGE: llm_metrics.entity_coverage_score(
            llm_metrics.count_entities(content)
        ),
        METRIC_DIRECT_ANSWER: bool_score(llm_metrics.has_direct_answer(content)),
        METRIC_STRUCTURED_DATA: bool_score(
            llm_metrics.has_structured_data(content, LLM_STRUCTURED_DATA_TYPES)
        ),
    }

    return ScoreBreakdown.from_results(
        MetricResult(metric=name, score=scores[name], weight=LLM_WEIGHTS[name])
        for name in LLM_METRICS
    )
