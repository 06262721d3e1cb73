"""Structured logging configuration.

All logs go to stdout for the hosting platform to capture.
Uses JSON format for structured logging in production.

ERROR LOGGING REQUIREMENTS:
- Scoring start/end with document size and keyword at DEBUG/INFO level
- Slow scoring passes (>1s) at WARNING level
- Malformed structured data (JSON-LD) at DEBUG level, never raised
- Unexpected scoring failures at ERROR level with stack trace
"""

import logging
import sys
from datetime import UTC, datetime
from typing import Any

from pythonjsonlogger import jsonlogger

from app.core.config import get_settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):  # type: ignore[name-defined]
    """Custom JSON formatter with additional fields."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(UTC).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)


def setup_logging() -> None:
    """Configure application logging.

    Outputs to stdout only.
    Uses JSON format in production, text format in development.
    """
    settings = get_settings()

    # Root logger configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.log_level.upper()))

    # Clear existing handlers
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)

    formatter: logging.Formatter
    if settings.log_format == "json":
        formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Set log levels for noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(name)


def truncate_keyword(keyword: str | None, limit: int = 100) -> str | None:
    """Shorten a keyword for log output."""
    if keyword is None:
        return None
    return keyword[:limit]


class ScoringLogger:
    """Logger for scoring passes with required error logging."""

    def __init__(self) -> None:
        self.logger = get_logger("scoring")

    def pass_started(
        self,
        kind: str,
        content_length: int,
        keyword: str | None,
        content_id: str | None = None,
    ) -> None:
        """Log the start of a scoring pass at DEBUG level."""
        self.logger.debug(
            f"{kind} scoring started",
            extra={
                "kind": kind,
                "content_length": content_length,
                "keyword": truncate_keyword(keyword),
                "content_id": content_id,
            },
        )

    def pass_completed(
        self,
        kind: str,
        total_score: int,
        metric_count: int,
        duration_ms: float,
        content_id: str | None = None,
    ) -> None:
        """Log a finished scoring pass at DEBUG level."""
        self.logger.debug(
            f"{kind} scoring completed",
            extra={
                "kind": kind,
                "total_score": total_score,
                "metric_count": metric_count,
                "duration_ms": round(duration_ms, 2),
                "content_id": content_id,
            },
        )

    def slow_pass(
        self,
        kind: str,
        duration_ms: float,
        threshold_ms: float,
        content_length: int,
    ) -> None:
        """Log slow scoring at WARNING level."""
        self.logger.warning(
            f"Slow {kind} scoring",
            extra={
                "kind": kind,
                "duration_ms": round(duration_ms, 2),
                "threshold_ms": threshold_ms,
                "content_length": content_length,
            },
        )

    def structured_data_invalid(self, error: Exception, snippet: str) -> None:
        """Log an unparseable JSON-LD block (treated as absent)."""
        self.logger.debug(
            "Ignoring malformed JSON-LD block",
            extra={
                "error_type": type(error).__name__,
                "error_message": str(error),
                "snippet": snippet[:200],
            },
        )


# Singleton scoring logger
scoring_logger = ScoringLogger()
