"""
Participant and coordinate schemas.

Fields are optional on the wire so that missing values reach the session
engine and fail with its ValidationError (HTTP 400) instead of a generic
schema error.

Dependencies: pydantic, meetup.core.types
System role: Shared request fragments
"""

from pydantic import BaseModel

from meetup.core.types import Coordinates, Participant


class SenderSchema(BaseModel):
    """Caller-supplied ephemeral identity."""

    id: str | None = None
    name: str | None = None

    def to_participant(self) -> Participant:
        return Participant(id=self.id, name=self.name)


class LocationSchema(BaseModel):
    """Already-resolved GPS coordinates."""

    latitude: float | None = None
    longitude: float | None = None

    def to_coordinates(self) -> Coordinates:
        return Coordinates(latitude=self.latitude, longitude=self.longitude)
