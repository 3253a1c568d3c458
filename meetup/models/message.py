"""
Message domain models and schemas.

Request/response schemas for posting messages and polling the session view.

Dependencies: pydantic
System role: Message and view API contracts
"""

from pydantic import BaseModel, ConfigDict, Field

from meetup.models.common import UtcDatetime
from meetup.models.location import LocationMarkResponse
from meetup.models.participant import LocationSchema, SenderSchema


class PostMessageRequest(BaseModel):
    """Request schema for sending a chat message."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str | None = Field(default=None, alias="sessionId")
    message: str | None = Field(default=None, description="Message text")
    location: LocationSchema | None = Field(
        default=None,
        description="Sender position; refreshes the sender's location mark when present",
    )
    sender: SenderSchema | None = None


class MessageResponse(BaseModel):
    """Stored chat message."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    session_id: str
    sender_id: str
    sender_name: str | None
    content: str
    created_at: UtcDatetime


class SessionViewResponse(BaseModel):
    """Snapshot returned to polling clients."""

    messages: list[MessageResponse]
    locations: list[LocationMarkResponse]
