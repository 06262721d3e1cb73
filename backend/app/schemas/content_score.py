"""Pydantic schemas for the Content Score API endpoints.

Schemas for on-page SEO and answer-engine scoring:
- ContentScoreRequest: Draft HTML plus keyword, meta description and slug
- ContentScoreResponse: Both breakdowns, bands and the writer checklist
- ScoreBreakdownResponse: A single SEO or LLM breakdown
- ContentScoreBatchRequest/Response: Batch scoring
- MetricsContractResponse: Metric names and weights clients can rely on

Error Logging Requirements:
- Log all incoming requests with method, path, request_id
- Log request body at DEBUG level (sanitize sensitive fields)
- Log response status and timing for every request
- Return structured error responses: {"error": str, "code": str, "request_id": str}
- Log 4xx errors at WARNING, 5xx at ERROR
"""

from typing import Literal

from pydantic import BaseModel, Field

ScoreBand = Literal["good", "warning", "poor"]

# =============================================================================
# BREAKDOWN MODELS
# =============================================================================


class MetricResultItem(BaseModel):
    """One named sub-score."""

    metric: str = Field(
        ...,
        description="Metric name (stable identifier)",
        examples=["Keyword density", "Direct answer (TL;DR)"],
    )
    score: int = Field(..., ge=0, le=100, description="Sub-score from 0-100")
    weight: float = Field(1.0, gt=0, description="Weight in the composite score")


class ScoreBreakdownResponse(BaseModel):
    """Composite score with its ordered sub-scores."""

    total_score: int = Field(..., ge=0, le=100, description="Composite score 0-100")
    band: ScoreBand = Field(..., description="Display band for the score")
    breakdown: list[MetricResultItem] = Field(
        default_factory=list,
        description="Sub-scores in evaluation order (empty when not evaluated)",
    )
    duration_ms: float = Field(0.0, description="Processing time in milliseconds")


class ChecklistItemSchema(BaseModel):
    """A pass/fail task shown to the writer."""

    label: str = Field(..., description="Task label", examples=["Keyword in URL (slug)"])
    completed: bool = Field(..., description="Whether the task is done")
    requirement: str = Field(
        ...,
        description="Current score or hint for completing the task",
        examples=["Current score: 100%", "Include the keyword in the slug"],
    )


# =============================================================================
# CONTENT SCORE REQUEST
# =============================================================================


class ContentScoreRequest(BaseModel):
    """Request schema for scoring a draft."""

    content: str = Field(
        "",
        description="Article body HTML",
        examples=["<h1>7 Espresso Tips</h1><p>Pull better shots at home...</p>"],
    )
    keyword: str = Field(
        "",
        max_length=200,
        description="Primary target keyword",
        examples=["espresso"],
    )
    meta_description: str = Field(
        "",
        description="SEO meta description",
    )
    slug: str = Field(
        "",
        max_length=500,
        description="URL slug",
        examples=["espresso-tips"],
    )
    site_hosts: list[str] | None = Field(
        None,
        description="Hostnames treated as internal links (server default if null)",
        examples=[["blog.example.com"]],
    )
    project_id: str | None = Field(None, description="Optional project ID for tracking")
    page_id: str | None = Field(None, description="Optional page ID for tracking")
    content_id: str | None = Field(None, description="Optional content ID for tracking")


# =============================================================================
# CONTENT SCORE RESPONSE
# =============================================================================


class ContentScoreResponse(BaseModel):
    """Response schema for a full scoring pass."""

    success: bool = Field(..., description="Whether scoring completed successfully")
    content_id: str | None = Field(None, description="Content ID that was scored")

    seo_score: int = Field(0, ge=0, le=100, description="Composite SEO score")
    seo_band: ScoreBand = Field("poor", description="Display band for the SEO score")
    seo_breakdown: list[MetricResultItem] = Field(
        default_factory=list,
        description="SEO sub-scores (14 when evaluated)",
    )
    llm_score: int = Field(0, ge=0, le=100, description="Composite LLM score")
    llm_band: ScoreBand = Field("poor", description="Display band for the LLM score")
    llm_breakdown: list[MetricResultItem] = Field(
        default_factory=list,
        description="LLM sub-scores (3 when evaluated)",
    )

    checklist: list[ChecklistItemSchema] = Field(
        default_factory=list,
        description="Writer checklist",
    )
    checklist_completed: int = Field(0, ge=0, description="Completed checklist items")
    checklist_total: int = Field(0, ge=0, description="Total checklist items")
    evaluated: bool = Field(
        False,
        description="False when blank content or keyword skipped evaluation",
    )

    error: str | None = Field(None, description="Error message if failed")
    duration_ms: float = Field(..., description="Processing time in milliseconds")


# =============================================================================
# BATCH CONTENT SCORE
# =============================================================================


class ContentScoreBatchRequest(BaseModel):
    """Request schema for batch scoring."""

    items: list[ContentScoreRequest] = Field(
        ...,
        min_length=1,
        description="Drafts to score",
    )
    project_id: str | None = Field(None, description="Optional project ID for tracking")


class ContentScoreBatchItemResponse(BaseModel):
    """Response for a single item in batch scoring."""

    content_id: str | None = Field(None, description="Content ID")
    page_id: str | None = Field(None, description="Page ID")
    success: bool = Field(..., description="Whether scoring completed")
    seo_score: int = Field(0, ge=0, le=100, description="Composite SEO score")
    llm_score: int = Field(0, ge=0, le=100, description="Composite LLM score")
    checklist_completed: int = Field(0, ge=0, description="Completed checklist items")
    checklist_total: int = Field(0, ge=0, description="Total checklist items")
    error: str | None = Field(None, description="Error message if failed")


class ContentScoreBatchResponse(BaseModel):
    """Response schema for batch scoring."""

    success: bool = Field(
        ...,
        description="Whether batch completed (some may have failed)",
    )
    results: list[ContentScoreBatchItemResponse] = Field(
        default_factory=list,
        description="Results for each item",
    )
    total_items: int = Field(0, description="Total items in request")
    success_count: int = Field(0, description="Items scored successfully")
    error_count: int = Field(0, description="Items with errors")
    average_seo_score: float = Field(0.0, description="Average SEO score")
    average_llm_score: float = Field(0.0, description="Average LLM score")
    error: str | None = Field(None, description="Error if batch failed")
    duration_ms: float = Field(..., description="Total processing time")


# =============================================================================
# METRICS CONTRACT
# =============================================================================


class MetricDefinition(BaseModel):
    """A metric name and its weight."""

    metric: str = Field(..., description="Metric name")
    weight: float = Field(..., gt=0, description="Weight in the composite score")


class MetricsContractResponse(BaseModel):
    """Metric names clients can look breakdown entries up by."""

    seo: list[MetricDefinition] = Field(..., description="SEO metrics in order")
    llm: list[MetricDefinition] = Field(..., description="LLM metrics in order")
