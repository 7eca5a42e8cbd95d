"""Shared utilities for the quotation service."""

from .logging import (
    clear_correlation_id,
    configure_logging,
    get_correlation_id,
    get_logger,
    log_quote_operation,
    set_correlation_id,
)
from .money import cents_to_decimal, format_amount

__all__ = [
    "clear_correlation_id",
    "configure_logging",
    "get_correlation_id",
    "get_logger",
    "log_quote_operation",
    "set_correlation_id",
    "cents_to_decimal",
    "format_amount",
]
