"""Service orchestrators."""

from .reaper import PeriodicReaper, reap_best_effort
from .session_engine import (
    FRESHNESS_WINDOW,
    MESSAGE_HISTORY_LIMIT,
    RETENTION_WINDOW,
    SessionEngine,
)

__all__ = [
    "FRESHNESS_WINDOW",
    "MESSAGE_HISTORY_LIMIT",
    "RETENTION_WINDOW",
    "PeriodicReaper",
    "SessionEngine",
    "reap_best_effort",
]
