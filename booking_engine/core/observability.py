"""
Observability Infrastructure

Structured logging and operation metrics for the booking engine. The engine
itself does no I/O; these helpers only describe what it decided.
"""

import contextvars
import functools
import logging
import sys
import time
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

import structlog
from prometheus_client import Counter, Histogram

from .config import settings

# Context variables for correlation tracking
correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)

F = TypeVar("F", bound=Callable[..., Any])

# Prometheus metrics
ENGINE_OPERATIONS = Counter(
    "booking_engine_operations_total",
    "Total booking engine operations",
    ["operation", "status"],
)

ENGINE_DURATION = Histogram(
    "booking_engine_operation_duration_seconds",
    "Booking engine operation duration",
    ["operation"],
)

SERIES_DATES = Counter(
    "booking_engine_series_dates_total",
    "Recurring series dates by outcome",
    ["outcome"],
)


class CorrelationIdProcessor:
    """Structlog processor to add correlation ID to all log entries."""

    def __call__(
        self, logger: Any, name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        correlation_id = correlation_id_var.get("")
        if correlation_id:
            event_dict["correlation_id"] = correlation_id
        return event_dict


def setup_structured_logging() -> None:
    """Configure structured logging with JSON output and correlation tracking."""

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        CorrelationIdProcessor(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=settings.ENVIRONMENT == "local")
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set correlation ID for request tracking."""
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())

    correlation_id_var.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str:
    """Get current correlation ID."""
    return correlation_id_var.get("")


def record_series_outcome(outcome: str, count: int = 1) -> None:
    """Count generated series dates by outcome ("created" or "failed")."""
    if settings.ENABLE_METRICS and count:
        SERIES_DATES.labels(outcome=outcome).inc(count)


def monitor_operation(operation: str) -> Callable[[F], F]:
    """
    Decorator that times an engine operation and counts its outcome.

    Operations return ``Result`` values, so a ``Failure`` is counted as
    ``rejected`` rather than ``error``; ``error`` is reserved for exceptions.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            logger = get_logger(func.__module__)
            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                if settings.ENABLE_METRICS:
                    ENGINE_OPERATIONS.labels(operation=operation, status="error").inc()
                logger.error(
                    "Operation failed",
                    operation=operation,
                    error=str(e),
                    error_type=type(e).__name__,
                    exc_info=True,
                )
                raise

            duration = time.perf_counter() - start_time
            is_failure = getattr(result, "is_failure", None)
            status = "rejected" if callable(is_failure) and is_failure() else "success"

            if settings.ENABLE_METRICS:
                ENGINE_OPERATIONS.labels(operation=operation, status=status).inc()
                ENGINE_DURATION.labels(operation=operation).observe(duration)

            logger.debug(
                "Operation completed",
                operation=operation,
                status=status,
                duration_seconds=duration,
            )
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
