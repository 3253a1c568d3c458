"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceCache,
    get_db_engine,
    get_service_cache,
    get_session_engine,
)

__all__ = [
    "ServiceCache",
    "get_db_engine",
    "get_service_cache",
    "get_session_engine",
]
