"""Content Score API endpoints.

Scores article drafts for on-page SEO and answer-engine readiness:
- POST /api/v1/content-score/check - Full score with checklist
- POST /api/v1/content-score/seo - SEO breakdown only
- POST /api/v1/content-score/llm - LLM breakdown only
- POST /api/v1/content-score/batch - Score multiple drafts
- GET /api/v1/content-score/metrics - Metric names and weights

Error Logging Requirements:
- Log all incoming requests with method, path, request_id
- Log request body at DEBUG level (sanitize sensitive fields)
- Log response status and timing for every request
- Return structured error responses: {"error": str, "code": str, "request_id": str}
- Log 4xx errors at WARNING, 5xx at ERROR
"""

import time

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.core.config import Settings, get_settings
from app.core.logging import get_logger
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
from app.services.content_score import (
    ContentScoreInput,
    ContentScoreResult,
    ContentScoreValidationError,
    get_content_score_service,
)
from app.services.scoring import (
    LLM_METRICS,
    LLM_WEIGHTS,
    SEO_METRICS,
    SEO_WEIGHTS,
    ScoreBreakdown,
    score_band,
)

logger = get_logger(__name__)

router = APIRouter()


def _get_request_id(request: Request) -> str:
    """Get request_id from request state."""
    return getattr(request.state, "request_id", "unknown")


def _validation_error_response(
    request_id: str, e: ContentScoreValidationError
) -> JSONResponse:
    logger.warning(
        "Content score validation error",
        extra={
            "request_id": request_id,
            "field": e.field_name,
            "value": str(e.value)[:100],
            "error_message": str(e),
        },
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": str(e),
            "code": "VALIDATION_ERROR",
            "request_id": request_id,
        },
    )


def _internal_error_response(request_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "code": "INTERNAL_ERROR",
            "request_id": request_id,
        },
    )


def _convert_request_to_input(
    data: ContentScoreRequest,
    project_id: str | None = None,
) -> ContentScoreInput:
    """Convert API request to service input."""
    return ContentScoreInput(
        content=data.content,
        keyword=data.keyword,
        meta_description=data.meta_description,
        slug=data.slug,
        site_hosts=data.site_hosts,
        project_id=data.project_id or project_id,
        page_id=data.page_id,
        content_id=data.content_id,
    )


def _convert_breakdown(
    breakdown: ScoreBreakdown, duration_ms: float = 0.0
) -> ScoreBreakdownResponse:
    return ScoreBreakdownResponse(
        total_score=breakdown.total_score,
        band=score_band(breakdown.total_score),
        breakdown=[
            MetricResultItem(metric=m.metric, score=m.score, weight=m.weight)
            for m in breakdown.breakdown
        ],
        duration_ms=round(duration_ms, 2),
    )


def _convert_result_to_response(result: ContentScoreResult) -> ContentScoreResponse:
    """Convert service result to API response schema."""
    return ContentScoreResponse(
        success=result.success,
        content_id=result.content_id,
        seo_score=result.seo_score,
        seo_band=score_band(result.seo_score),
        seo_breakdown=[
            MetricResultItem(metric=m.metric, score=m.score, weight=m.weight)
            for m in result.seo.breakdown
        ],
        llm_score=result.llm_score,
        llm_band=score_band(result.llm_score),
        llm_breakdown=[
            MetricResultItem(metric=m.metric, score=m.score, weight=m.weight)
            for m in result.llm.breakdown
        ],
        checklist=[
            ChecklistItemSchema(
                label=item.label,
                completed=item.completed,
                requirement=item.requirement,
            )
            for item in result.checklist
        ],
        checklist_completed=result.checklist_completed,
        checklist_total=len(result.checklist),
        evaluated=result.evaluated,
        error=result.error,
        duration_ms=round(result.duration_ms, 2),
    )


@router.post(
    "/check",
    response_model=ContentScoreResponse,
    summary="Score content",
    description="Compute SEO and LLM scores for a draft and derive the writer checklist.",
    responses={
        400: {
            "description": "Validation error",
            "content": {
                "application/json": {
                    "example": {
                        "error": "Validation failed for 'content': expected a string, got list",
                        "code": "VALIDATION_ERROR",
                        "request_id": "<request_id>",
                    }
                }
            },
        },
    },
)
async def check_content_score(
    request: Request,
    data: ContentScoreRequest,
) -> ContentScoreResponse | JSONResponse:
    """Score a draft.

    Runs 14 SEO heuristics (keyword usage, headings, meta description,
    paragraphs, images, links, readability, schema) and 3 answer-engine
    heuristics (entities, direct answer, structured data). Blank content
    or a missing keyword returns zero scores without evaluation.
    """
    request_id = _get_request_id(request)
    start_time = time.monotonic()

    logger.debug(
        "Content score request",
        extra={
            "request_id": request_id,
            "content_length": len(data.content),
            "keyword": data.keyword,
            "meta_description_length": len(data.meta_description),
            "slug": data.slug,
            "page_id": data.page_id,
            "content_id": data.content_id,
        },
    )

    try:
        service = get_content_score_service()
        result = await service.score_content(_convert_request_to_input(data))

        duration_ms = (time.monotonic() - start_time) * 1000

        logger.info(
            "Content score check complete",
            extra={
                "request_id": request_id,
                "content_id": data.content_id,
                "success": result.success,
                "seo_score": result.seo_score,
                "llm_score": result.llm_score,
                "duration_ms": round(duration_ms, 2),
            },
        )

        return _convert_result_to_response(result)

    except ContentScoreValidationError as e:
        return _validation_error_response(request_id, e)
    except Exception as e:
        logger.error(
            "Content score check failed",
            extra={
                "request_id": request_id,
                "content_id": data.content_id,
                "error_type": type(e).__name__,
                "error_message": str(e),
            },
            exc_info=True,
        )
        return _internal_error_response(request_id)


@router.post(
    "/seo",
    response_model=ScoreBreakdownResponse,
    summary="Score SEO only",
    description="Compute the 14-metric SEO breakdown for a draft.",
    responses={400: {"description": "Validation error"}},
)
async def check_seo_score(
    request: Request,
    data: ContentScoreRequest,
) -> ScoreBreakdownResponse | JSONResponse:
    """Run only the SEO aggregator, without the empty-input short circuit."""
    request_id = _get_request_id(request)
    start_time = time.monotonic()

    try:
        service = get_content_score_service()
        breakdown = await service.score_seo(_convert_request_to_input(data))
        duration_ms = (time.monotonic() - start_time) * 1000

        logger.info(
            "SEO score complete",
            extra={
                "request_id": request_id,
                "content_id": data.content_id,
                "seo_score": breakdown.total_score,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return _convert_breakdown(breakdown, duration_ms)

    except ContentScoreValidationError as e:
        return _validation_error_response(request_id, e)
    except Exception as e:
        logger.error(
            "SEO score failed",
            extra={
                "request_id": request_id,
                "content_id": data.content_id,
                "error_type": type(e).__name__,
                "error_message": str(e),
            },
            exc_info=True,
        )
        return _internal_error_response(request_id)


@router.post(
    "/llm",
    response_model=ScoreBreakdownResponse,
    summary="Score LLM readiness only",
    description="Compute the 3-metric answer-engine breakdown for a draft.",
    responses={400: {"description": "Validation error"}},
)
async def check_llm_score(
    request: Request,
    data: ContentScoreRequest,
) -> ScoreBreakdownResponse | JSONResponse:
    """Run only the LLM aggregator, without the empty-input short circuit."""
    request_id = _get_request_id(request)
    start_time = time.monotonic()

    try:
        service = get_content_score_service()
        breakdown = await service.score_llm(_convert_request_to_input(data))
        duration_ms = (time.monotonic() - start_time) * 1000

        logger.info(
            "LLM score complete",
            extra={
                "request_id": request_id,
                "content_id": data.content_id,
                "llm_score": breakdown.total_score,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return _convert_breakdown(breakdown, duration_ms)

    except ContentScoreValidationError as e:
        return _validation_error_response(request_id, e)
    except Exception as e:
        logger.error(
            "LLM score failed",
            extra={
                "request_id": request_id,
                "content_id": data.content_id,
                "error_type": type(e).__name__,
                "error_message": str(e),
            },
            exc_info=True,
        )
        return _internal_error_response(request_id)


@router.post(
    "/batch",
    response_model=ContentScoreBatchResponse,
    summary="Batch score content",
    description="Score multiple drafts and return aggregate statistics.",
    responses={400: {"description": "Validation error"}},
)
async def check_content_score_batch(
    request: Request,
    data: ContentScoreBatchRequest,
    settings: Settings = Depends(get_settings),
) -> ContentScoreBatchResponse | JSONResponse:
    """Score multiple drafts.

    Returns aggregate statistics and individual results. Averages cover
    successfully scored items only.
    """
    request_id = _get_request_id(request)
    start_time = time.monotonic()

    logger.debug(
        "Content score batch request",
        extra={
            "request_id": request_id,
            "project_id": data.project_id,
            "item_count": len(data.items),
        },
    )

    if len(data.items) > settings.score_batch_max_items:
        logger.warning(
            "Content score batch too large",
            extra={
                "request_id": request_id,
                "item_count": len(data.items),
                "max_items": settings.score_batch_max_items,
            },
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": (
                    f"Batch contains {len(data.items)} items; "
                    f"maximum is {settings.score_batch_max_items}"
                ),
                "code": "VALIDATION_ERROR",
                "request_id": request_id,
            },
        )

    try:
        service = get_content_score_service()
        inputs = [
            _convert_request_to_input(item, project_id=data.project_id)
            for item in data.items
        ]
        results = await service.score_content_batch(
            inputs=inputs,
            project_id=data.project_id,
        )

        duration_ms = (time.monotonic() - start_time) * 1000

        items: list[ContentScoreBatchItemResponse] = []
        error_count = 0
        seo_total = 0
        llm_total = 0
        for result in results:
            items.append(
                ContentScoreBatchItemResponse(
                    content_id=result.content_id,
                    page_id=result.page_id,
                    success=result.success,
                    seo_score=result.seo_score,
                    llm_score=result.llm_score,
                    checklist_completed=result.checklist_completed,
                    checklist_total=len(result.checklist),
                    error=result.error,
                )
            )
            if not result.success:
                error_count += 1
                continue
            seo_total += result.seo_score
            llm_total += result.llm_score

        success_count = len(results) - error_count
        average_seo = round(seo_total / success_count, 2) if success_count > 0 else 0.0
        average_llm = round(llm_total / success_count, 2) if success_count > 0 else 0.0

        logger.info(
            "Content score batch complete",
            extra={
                "request_id": request_id,
                "project_id": data.project_id,
                "total_items": len(data.items),
                "success_count": success_count,
                "error_count": error_count,
                "average_seo_score": average_seo,
                "average_llm_score": average_llm,
                "duration_ms": round(duration_ms, 2),
            },
        )

        return ContentScoreBatchResponse(
            success=True,
            results=items,
            total_items=len(data.items),
            success_count=success_count,
            error_count=error_count,
            average_seo_score=average_seo,
            average_llm_score=average_llm,
            error=None,
            duration_ms=round(duration_ms, 2),
        )

    except Exception as e:
        logger.error(
            "Content score batch failed",
            extra={
                "request_id": request_id,
                "project_id": data.project_id,
                "item_count": len(data.items),
                "error_type": type(e).__name__,
                "error_message": str(e),
            },
            exc_info=True,
        )
        return _internal_error_response(request_id)


@router.get(
    "/metrics",
    response_model=MetricsContractResponse,
    summary="List metrics",
    description="Metric names and weights, in evaluation order.",
)
async def list_metrics() -> MetricsContractResponse:
    """Metric names are stable identifiers clients look breakdowns up by."""
    return MetricsContractResponse(
        seo=[MetricDefinition(metric=name, weight=SEO_WEIGHTS[name]) for name in SEO_METRICS],
        llm=[MetricDefinition(metric=name, weight=LLM_WEIGHTS[name]) for name in LLM_METRICS],
    )
