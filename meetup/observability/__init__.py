"""Logging, correlation IDs and request middleware."""

from meetup.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from meetup.observability.logger import configure_logging

__all__ = [
    "clear_correlation_id",
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
]
