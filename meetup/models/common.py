"""
Common response models and utilities.

Generic acknowledgement and error schemas shared by all routers, plus the
timestamp type every response uses.

Dependencies: pydantic
System role: Common API response structures
"""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; the store clock is always UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class SuccessResponse(BaseModel):
    """Acknowledgement for write operations."""

    success: bool = True


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    error: str = Field(description="Error message")
    details: dict | None = Field(default=None, description="Additional error context")
