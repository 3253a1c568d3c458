"""
Value types passed into and returned from the session engine.

Participants are caller-asserted: the engine stores whatever id and name a
client supplies and performs no identity verification.

Dependencies: dataclasses
System role: Engine-facing domain values
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from meetup.boundary.db.models import LocationMarkModel, MessageModel


@dataclass(frozen=True)
class Participant:
    """Ephemeral identity attached to every write."""

    id: str | None
    name: str | None = None


@dataclass(frozen=True)
class Coordinates:
    """Already-resolved GPS position in decimal degrees."""

    latitude: float | None
    longitude: float | None


@dataclass
class SessionView:
    """
    Composite read returned to polling clients.

    A full snapshot, not a delta: messages are newest first and capped,
    locations only include marks inside the freshness window.
    """

    session_id: str
    messages: list["MessageModel"] = field(default_factory=list)
    locations: list["LocationMarkModel"] = field(default_factory=list)
