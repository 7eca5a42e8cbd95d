"""Structured logging with per-request correlation IDs.

Usage:
    from quotation.utils.logging import get_logger, set_correlation_id

    # In middleware:
    set_correlation_id(request.headers.get("X-Correlation-ID"))

    # In service code:
    logger = get_logger(__name__)
    logger.info("Quote submitted", extra={"quote_id": quote.id})
"""

import logging
import os
import uuid
from contextvars import ContextVar
from typing import Any

NO_CORRELATION_ID = "no-correlation-id"

# Async-safe: each request task sees its own value
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def generate_correlation_id() -> str:
    """Generate a new UUID-based correlation ID."""
    return str(uuid.uuid4())


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set the correlation ID for the current context.

    Args:
        correlation_id: Existing ID to reuse. A new one is generated if None.

    Returns:
        The correlation ID that was set
    """
    cid = correlation_id or generate_correlation_id()
    _correlation_id.set(cid)
    return cid


def get_correlation_id() -> str | None:
    """Get the correlation ID of the current context, if any."""
    return _correlation_id.get()


def clear_correlation_id() -> None:
    """Clear the correlation ID context."""
    _correlation_id.set(None)


class CorrelationIdFilter(logging.Filter):
    """Logging filter that stamps records with the current correlation ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or NO_CORRELATION_ID
        return True


class StructuredFormatter(logging.Formatter):
    """Formatter that prefixes every line with its correlation ID."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = get_correlation_id() or NO_CORRELATION_ID

        base = super().format(record)
        return f"[{record.correlation_id}] {base}"


def configure_logging(level: str | None = None) -> None:
    """Install a StructuredFormatter handler on the root logger.

    Args:
        level: Log level name. Defaults to LOG_LEVEL env var, then INFO.
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    root = logging.getLogger()
    root.setLevel(level_name)

    if not any(isinstance(h.formatter, StructuredFormatter) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(
            StructuredFormatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with correlation ID support.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not any(isinstance(f, CorrelationIdFilter) for f in logger.filters):
        logger.addFilter(CorrelationIdFilter())

    return logger


def log_quote_operation(
    logger: logging.Logger,
    operation: str,
    *,
    quote_id: str | None = None,
    stay_id: str | None = None,
    total_price: int | None = None,
    status: str | None = None,
    error: str | None = None,
    **extra: Any,
) -> None:
    """Log a quote operation with structured context.

    Args:
        logger: Logger instance
        operation: Operation name (e.g., "submit_quote", "update_status")
        quote_id: Quote ID if available
        stay_id: Stay ID if available
        total_price: Quote total in EUR cents if relevant
        status: Quote status
        error: Error message if operation failed
        **extra: Additional context fields
    """
    context: dict[str, Any] = {"operation": operation}

    if quote_id:
        context["quote_id"] = quote_id
    if stay_id:
        context["stay_id"] = stay_id
    if total_price is not None:
        context["total_price"] = total_price
    if status:
        context["quote_status"] = status
    if error:
        context["error"] = error

    context.update(extra)

    msg_parts = [f"Quote operation: {operation}"]
    for key, value in context.items():
        if key != "operation":
            msg_parts.append(f"{key}={value}")

    message = " | ".join(msg_parts)

    if error:
        logger.error(message, extra=context)
    else:
        logger.info(message, extra=context)
