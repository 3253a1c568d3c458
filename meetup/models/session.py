"""
Session domain models and schemas.

Request/response schemas for session operations.

Dependencies: pydantic
System role: Session API contracts
"""

from pydantic import BaseModel, ConfigDict, Field

from meetup.models.common import UtcDatetime

class SessionSchema(BaseModel):
    """Session metadata."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str | None
    created_at: UtcDatetime


class SessionResponse(BaseModel):
    """Response schema for session lookup."""

    session: SessionSchema


class RenameSessionRequest(BaseModel):
    """Request schema for renaming a session."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str | None = Field(default=None, alias="sessionId")
    name: str | None = None


class ResolveSessionRequest(BaseModel):
    """Request schema for turning a meetup name into a session id."""

    name: str | None = None


class ResolveSessionResponse(BaseModel):
    """Session id derived from a meetup name."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(serialization_alias="sessionId")
