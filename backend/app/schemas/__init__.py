"""Schemas layer - Pydantic models for API validation.

Schemas define the shape of data for API requests and responses.
They handle validation, serialization, and documentation.
"""

from app.schemas.content_score import (
    ChecklistItemSchema,
    ContentScoreBatchItemResponse,
    ContentScoreBatchRequest,
    ContentScoreBatchResponse,
    ContentScoreRequest,
    ContentScoreResponse,
    MetricDefinition,
    MetricResultItem,
    MetricsContractResponse,
    ScoreBreakdownResponse,
)

__all__ = [
    # Content score schemas
    "ContentScoreRequest",
    "ContentScoreResponse",
    "ScoreBreakdownResponse",
    "MetricResultItem",
    "ChecklistItemSchema",
    "ContentScoreBatchRequest",
    "ContentScoreBatchItemResponse",
    "ContentScoreBatchResponse",
    "MetricDefinition",
    "MetricsContractResponse",
]
