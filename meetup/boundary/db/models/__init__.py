"""
Database models package.

Exports:
  - SessionModel: Session ORM model
  - MessageModel: Chat message ORM model
  - LocationMarkModel: Per-participant location ORM model

Dependencies: sqlalchemy, meetup.boundary.db.base
System role: Database model definitions for domain entities
"""

from meetup.boundary.db.models.session_model import SessionModel
from meetup.boundary.db.models.message_model import MessageModel
from meetup.boundary.db.models.location_model import LocationMarkModel

__all__ = [
    "SessionModel",
    "MessageModel",
    "LocationMarkModel",
]
