"""Content Scoring Service for on-page SEO and answer-engine readiness.

Wraps the pure aggregators in app.services.scoring with the behaviour the
article editor expects from a scoring pass:
- SEO breakdown (14 metrics) and LLM breakdown (3 metrics)
- Writer checklist with completion progress
- Score bands (good / warning / poor) for display
- Optional artificial delay so the editor can show a loading state
- Batch scoring

A pass over blank content or without a keyword is not evaluated: both
scores are 0 with empty breakdowns, matching what the editor shows before
the writer has anything to score.

ERROR LOGGING REQUIREMENTS:
- Log method entry/exit at DEBUG level with parameters (sanitized)
- Log all exceptions with full stack trace and context
- Carry caller-supplied content_id (and project_id/page_id when given) in logs
- Log validation failures with field names and rejected values
- Add timing logs for operations >1 second
"""

import asyncio
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from app.core.config import Settings, get_settings
from app.core.logging import get_logger, scoring_logger
from app.services.checklist import (
    DEFAULT_COMPLETION_THRESHOLD,
    ChecklistItem,
    build_checklist,
    checklist_progress,
)
from app.services.scoring import (
    ScoreBreakdown,
    calculate_llm_score,
    calculate_seo_score,
    score_band,
)
from app.services.seo_metrics import DEFAULT_MAX_PARAGRAPH_WORDS, DEFAULT_MIN_WORDS

logger = get_logger(__name__)

# Threshold for logging slow operations (in milliseconds)
SLOW_OPERATION_THRESHOLD_MS = 1000

_TEXT_FIELDS = ("content", "keyword", "meta_description", "slug")


class ContentScoreServiceError(Exception):
    """Base exception for ContentScoreService errors."""

    def __init__(
        self,
        message: str,
        project_id: str | None = None,
        page_id: str | None = None,
    ) -> None:
        self.project_id = project_id
        self.page_id = page_id
        super().__init__(message)


class ContentScoreValidationError(ContentScoreServiceError):
    """Raised when input validation fails."""

    def __init__(
        self,
        field_name: str,
        value: Any,
        message: str,
        project_id: str | None = None,
        page_id: str | None = None,
    ) -> None:
        self.field_name = field_name
        self.value = value
        super().__init__(
            f"Validation failed for '{field_name}': {message}",
            project_id=project_id,
            page_id=page_id,
        )


@dataclass
class ContentScoreInput:
    """Input data for a scoring pass.

    Attributes:
        content: Article body HTML
        keyword: Primary target keyword
        meta_description: SEO meta description
        slug: URL slug
        site_hosts: Hostnames treated as internal (service default when None)
        project_id: Project ID for logging
        page_id: Page ID for logging
        content_id: Caller's content ID, echoed in the result
    """

    content: str | None
    keyword: str | None = ""
    meta_description: str | None = ""
    slug: str | None = ""
    site_hosts: list[str] | None = None
    project_id: str | None = None
    page_id: str | None = None
    content_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging (sanitized)."""
        return {
            "content_length": len(self.content) if isinstance(self.content, str) else 0,
            "keyword": self.keyword,
            "meta_description_length": (
                len(self.meta_description)
                if isinstance(self.meta_description, str)
                else 0
            ),
            "slug": self.slug,
            "site_host_count": len(self.site_hosts or []),
            "project_id": self.project_id,
            "page_id": self.page_id,
            "content_id": self.content_id,
        }


@dataclass
class ContentScoreResult:
    """Result of a scoring pass.

    Attributes:
        success: Whether scoring completed
        seo: SEO breakdown (empty when the pass was skipped)
        llm: LLM breakdown (empty when the pass was skipped)
        checklist: Writer checklist
        evaluated: False when blank content or keyword skipped evaluation
        error: Error message if failed
        duration_ms: Total time taken in milliseconds
    """

    success: bool
    seo: ScoreBreakdown = field(default_factory=ScoreBreakdown)
    llm: ScoreBreakdown = field(default_factory=ScoreBreakdown)
    checklist: list[ChecklistItem] = field(default_factory=list)
    evaluated: bool = False
    error: str | None = None
    duration_ms: float = 0.0
    project_id: str | None = None
    page_id: str | None = None
    content_id: str | None = None

    @property
    def seo_score(self) -> int:
        return self.seo.total_score

    @property
    def llm_score(self) -> int:
        return self.llm.total_score

    @property
    def checklist_completed(self) -> int:
        return checklist_progress(self.checklist)[0]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "success": self.success,
            "content_id": self.content_id,
            "seo_score": self.seo_score,
            "seo_band": score_band(self.seo_score),
            "seo_breakdown": [item.to_dict() for item in self.seo.breakdown],
            "llm_score": self.llm_score,
            "llm_band": score_band(self.llm_score),
            "llm_breakdown": [item.to_dict() for item in self.llm.breakdown],
            "checklist": [item.to_dict() for item in self.checklist],
            "checklist_completed": self.checklist_completed,
            "checklist_total": len(self.checklist),
            "evaluated": self.evaluated,
            "error": self.error,
            "duration_ms": round(self.duration_ms, 2),
        }


class ContentScoreService:
    """Service for scoring article drafts.

    Example usage:
        service = ContentScoreService(site_hosts=["blog.example.com"])
        result = await service.score_content(
            ContentScoreInput(
                content="<h1>10 coffee tips</h1><p>...</p>",
                keyword="coffee",
                meta_description="...",
                slug="coffee-tips",
            )
        )
        print(result.seo_score, result.llm_score)
    """

    def __init__(
        self,
        site_hosts: Iterable[str] | None = None,
        min_words: int = DEFAULT_MIN_WORDS,
        max_paragraph_words: int = DEFAULT_MAX_PARAGRAPH_WORDS,
        checklist_threshold: int = DEFAULT_COMPLETION_THRESHOLD,
        simulated_delay_ms: int = 0,
    ) -> None:
        """Initialize content score service.

        Args:
            site_hosts: The site's own hostnames for internal-link detection
            min_words: Minimum article length for the length check
            max_paragraph_words: Word limit for the short-paragraph check
            checklist_threshold: Sub-score at which a checklist item passes
            simulated_delay_ms: Delay awaited before each scoring pass
        """
        self.site_hosts = [host.lower() for host in (site_hosts or []) if host]
        self.min_words = min_words
        self.max_paragraph_words = max_paragraph_words
        self.checklist_threshold = checklist_threshold
        self.simulated_delay_ms = simulated_delay_ms

        logger.debug(
            "ContentScoreService initialized",
            extra={
                "site_hosts": self.site_hosts,
                "min_words": self.min_words,
                "max_paragraph_words": self.max_paragraph_words,
                "checklist_threshold": self.checklist_threshold,
                "simulated_delay_ms": self.simulated_delay_ms,
            },
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ContentScoreService":
        """Build a service configured from application settings."""
        return cls(
            site_hosts=settings.site_hostnames,
            min_words=settings.score_min_word_count,
            max_paragraph_words=settings.score_max_paragraph_words,
            checklist_threshold=settings.score_checklist_threshold,
            simulated_delay_ms=settings.score_simulated_delay_ms,
        )

    def _validate_input(self, input_data: ContentScoreInput) -> None:
        """Reject non-string text fields; None and "" are valid."""
        for field_name in _TEXT_FIELDS:
            value = getattr(input_data, field_name)
            if value is not None and not isinstance(value, str):
                logger.warning(
                    "Validation failed: field is not text",
                    extra={
                        "field": field_name,
                        "rejected_value": repr(value)[:100],
                        "project_id": input_data.project_id,
                        "page_id": input_data.page_id,
                    },
                )
                raise ContentScoreValidationError(
                    field_name,
                    value,
                    f"expected a string, got {type(value).__name__}",
                    project_id=input_data.project_id,
                    page_id=input_data.page_id,
                )

    def _hosts_for(self, input_data: ContentScoreInput) -> list[str]:
        if input_data.site_hosts is not None:
            return [host.lower() for host in input_data.site_hosts if host]
        return self.site_hosts

    async def _simulate_latency(self) -> None:
        if self.simulated_delay_ms > 0:
            await asyncio.sleep(self.simulated_delay_ms / 1000)

    def _log_timing(self, kind: str, start_time: float, input_data: ContentScoreInput,
                    breakdown: ScoreBreakdown) -> None:
        duration_ms = (time.monotonic() - start_time) * 1000
        scoring_logger.pass_completed(
            kind,
            breakdown.total_score,
            len(breakdown.breakdown),
            duration_ms,
            content_id=input_data.content_id,
        )
        if duration_ms > SLOW_OPERATION_THRESHOLD_MS:
            scoring_logger.slow_pass(
                kind,
                duration_ms,
                SLOW_OPERATION_THRESHOLD_MS,
                len(input_data.content or ""),
            )

    async def score_seo(self, input_data: ContentScoreInput) -> ScoreBreakdown:
        """Run only the SEO aggregator.

        Raises:
            ContentScoreValidationError: If a text field is not a string
        """
        self._validate_input(input_data)
        await self._simulate_latency()

        start_time = time.monotonic()
        scoring_logger.pass_started(
            "SEO",
            len(input_data.content or ""),
            input_data.keyword,
            content_id=input_data.content_id,
        )
        breakdown = calculate_seo_score(
            input_data.content,
            input_data.keyword,
            input_data.meta_description,
            input_data.slug,
            site_hosts=self._hosts_for(input_data),
            min_words=self.min_words,
            max_paragraph_words=self.max_paragraph_words,
        )
        self._log_timing("SEO", start_time, input_data, breakdown)
        return breakdown

    async def score_llm(self, input_data: ContentScoreInput) -> ScoreBreakdown:
        """Run only the LLM aggregator.

        Raises:
            ContentScoreValidationError: If a text field is not a string
        """
        self._validate_input(input_data)
        await self._simulate_latency()

        start_time = time.monotonic()
        scoring_logger.pass_started(
            "LLM",
            len(input_data.content or ""),
            input_data.keyword,
            content_id=input_data.content_id,
        )
        breakdown = calculate_llm_score(input_data.content, input_data.keyword)
        self._log_timing("LLM", start_time, input_data, breakdown)
        return breakdown

    async def score_content(self, input_data: ContentScoreInput) -> ContentScoreResult:
        """Score a draft and derive its checklist.

        Args:
            input_data: Draft HTML and SEO fields

        Returns:
            ContentScoreResult with both breakdowns and the checklist

        Raises:
            ContentScoreValidationError: If a text field is not a string
        """
        start_time = time.monotonic()
        project_id = input_data.project_id
        page_id = input_data.page_id

        logger.debug("score_content() called", extra=input_data.to_dict())

        self._validate_input(input_data)

        content = input_data.content or ""
        keyword = input_data.keyword or ""

        try:
            if not content.strip() or not keyword.strip():
                logger.debug(
                    "Scoring skipped: blank content or keyword",
                    extra={
                        "has_content": bool(content.strip()),
                        "has_keyword": bool(keyword.strip()),
                        "project_id": project_id,
                        "page_id": page_id,
                    },
                )
                seo = ScoreBreakdown()
                llm = ScoreBreakdown()
                evaluated = False
            else:
                seo = await self.score_seo(input_data)
                llm = await self.score_llm(input_data)
                evaluated = True

            checklist = build_checklist(
                seo, llm, keyword, threshold=self.checklist_threshold
            )
            duration_ms = (time.monotonic() - start_time) * 1000
            completed, total = checklist_progress(checklist)

            logger.info(
                "Content scoring completed",
                extra={
                    "seo_score": seo.total_score,
                    "llm_score": llm.total_score,
                    "checklist_completed": completed,
                    "checklist_total": total,
                    "evaluated": evaluated,
                    "duration_ms": round(duration_ms, 2),
                    "project_id": project_id,
                    "page_id": page_id,
                    "content_id": input_data.content_id,
                },
            )

            return ContentScoreResult(
                success=True,
                seo=seo,
                llm=llm,
                checklist=checklist,
                evaluated=evaluated,
                duration_ms=round(duration_ms, 2),
                project_id=project_id,
                page_id=page_id,
                content_id=input_data.content_id,
            )

        except Exception as e:
            duration_ms = (time.monotonic() - start_time) * 1000
            logger.error(
                "Content scoring exception",
                extra={
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                    "duration_ms": round(duration_ms, 2),
                    "project_id": project_id,
                    "page_id": page_id,
                    "content_id": input_data.content_id,
                },
                exc_info=True,
            )
            return ContentScoreResult(
                success=False,
                error=f"Unexpected error: {e!s}",
                duration_ms=round(duration_ms, 2),
                project_id=project_id,
                page_id=page_id,
                content_id=input_data.content_id,
            )

    async def score_content_batch(
        self,
        inputs: list[ContentScoreInput],
        project_id: str | None = None,
    ) -> list[ContentScoreResult]:
        """Score multiple drafts in order.

        Validation failures are reported per item instead of aborting the
        batch.

        Args:
            inputs: Drafts to score
            project_id: Project ID for logging

        Returns:
            List of ContentScoreResult, one per input
        """
        start_time = time.monotonic()

        logger.info(
            "Batch content scoring started",
            extra={
                "input_count": len(inputs),
                "project_id": project_id,
            },
        )

        if not inputs:
            return []

        results: list[ContentScoreResult] = []
        for input_data in inputs:
            try:
                result = await self.score_content(input_data)
            except ContentScoreValidationError as e:
                result = ContentScoreResult(
                    success=False,
                    error=str(e),
                    project_id=input_data.project_id,
                    page_id=input_data.page_id,
                    content_id=input_data.content_id,
                )
            results.append(result)

        duration_ms = (time.monotonic() - start_time) * 1000
        success_count = sum(1 for r in results if r.success)

        logger.info(
            "Batch content scoring completed",
            extra={
                "input_count": len(inputs),
                "success_count": success_count,
                "failure_count": len(inputs) - success_count,
                "duration_ms": round(duration_ms, 2),
                "project_id": project_id,
            },
        )

        if duration_ms > SLOW_OPERATION_THRESHOLD_MS:
            logger.warning(
                "Slow batch content scoring operation",
                extra={
                    "input_count": len(inputs),
                    "duration_ms": round(duration_ms, 2),
                    "threshold_ms": SLOW_OPERATION_THRESHOLD_MS,
                    "project_id": project_id,
                },
            )

        return results


# Global ContentScoreService instance
_content_score_service: ContentScoreService | None = None


def get_content_score_service() -> ContentScoreService:
    """Get the default ContentScoreService instance (singleton).

    Returns:
        ContentScoreService configured from application settings.
    """
    global _content_score_service
    if _content_score_service is None:
        _content_score_service = ContentScoreService.from_settings(get_settings())
        logger.info("ContentScoreService singleton created")
    return _content_score_service


async def score_content(
    content: str | None,
    keyword: str | None = "",
    meta_description: str | None = "",
    slug: str | None = "",
    site_hosts: list[str] | None = None,
    project_id: str | None = None,
    page_id: str | None = None,
) -> ContentScoreResult:
    """Convenience function to score a draft.

    Uses the default ContentScoreService singleton.

    Example:
        >>> result = await score_content(
        ...     content="<h1>5 espresso tips</h1><p>...</p>",
        ...     keyword="espresso",
        ...     meta_description="Learn to pull better espresso at home...",
        ...     slug="espresso-tips",
        ... )
        >>> print(f"SEO: {result.seo_score}, LLM: {result.llm_score}")
    """
    service = get_content_score_service()
    input_data = ContentScoreInput(
        content=content,
        keyword=keyword,
        meta_description=meta_description,
        slug=slug,
        site_hosts=site_hosts,
        project_id=project_id,
        page_id=page_id,
    )
    return await service.score_content(input_data)
