"""Services layer - Business logic and orchestration.

Metric evaluators (seo_metrics, llm_metrics) are pure functions; scoring
aggregates them, checklist turns breakdowns into writer tasks, and
content_score wraps it all in a logged, configurable service.
"""

from app.services.checklist import (
    CHECKLIST_ENTRIES,
    ChecklistEntry,
    ChecklistItem,
    build_checklist,
    checklist_progress,
)
from app.services.content_score import (
    ContentScoreInput,
    ContentScoreResult,
    ContentScoreService,
    ContentScoreServiceError,
    ContentScoreValidationError,
    get_content_score_service,
    score_content,
)
from app.services.scoring import (
    LLM_METRICS,
    LLM_WEIGHTS,
    SEO_METRICS,
    SEO_WEIGHTS,
    MetricResult,
    ScoreBreakdown,
    calculate_llm_score,
    calculate_seo_score,
    score_band,
)

__all__ = [
    # Aggregation
    "MetricResult",
    "ScoreBreakdown",
    "SEO_METRICS",
    "SEO_WEIGHTS",
    "LLM_METRICS",
    "LLM_WEIGHTS",
    "calculate_seo_score",
    "calculate_llm_score",
    "score_band",
    # Checklist
    "CHECKLIST_ENTRIES",
    "ChecklistEntry",
    "ChecklistItem",
    "build_checklist",
    "checklist_progress",
    # Content score service
    "ContentScoreService",
    "ContentScoreServiceError",
    "ContentScoreValidationError",
    "ContentScoreInput",
    "ContentScoreResult",
    "get_content_score_service",
    "score_content",
]
