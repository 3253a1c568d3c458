"""
Location domain models and schemas.

Dependencies: pydantic
System role: Location API contracts
"""

from pydantic import BaseModel, ConfigDict, Field

from meetup.models.common import UtcDatetime
from meetup.models.participant import LocationSchema, SenderSchema


class UpdateLocationRequest(BaseModel):
    """Request schema for a standalone location ping."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str | None = Field(default=None, alias="sessionId")
    sender: SenderSchema | None = None
    location: LocationSchema | None = None


class LocationMarkResponse(BaseModel):
    """Latest known position of a participant."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    session_id: str
    participant_id: str
    participant_name: str | None
    latitude: float
    longitude: float
    updated_at: UtcDatetime
