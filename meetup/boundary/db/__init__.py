"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, CreatedAtMixin, utcnow: Model building blocks and store clock
  - get_async_engine(), get_async_session_factory(): Store handle construction
  - create_all_tables(), drop_all_tables(): Schema management
  - SessionModel, MessageModel, LocationMarkModel: Core domain entities
  - session_crud, message_crud, location_crud: CRUD operation singletons

Dependencies: sqlalchemy, meetup.configs
System role: Database adapter providing persistent storage for sessions,
messages and participant locations.
"""

from meetup.boundary.db.base import Base, CreatedAtMixin, utcnow
from meetup.boundary.db.connection import get_async_engine, get_async_session_factory
from meetup.boundary.db.create_tables import create_all_tables, drop_all_tables
from meetup.boundary.db.models import LocationMarkModel, MessageModel, SessionModel
from meetup.boundary.db.CRUD import (
    BaseCRUD,
    LocationCRUD,
    MessageCRUD,
    SessionCRUD,
    location_crud,
    message_crud,
    session_crud,
)

__all__ = [
    # Base classes
    "Base",
    "CreatedAtMixin",
    "utcnow",
    # Connection
    "get_async_engine",
    "get_async_session_factory",
    # Schema
    "create_all_tables",
    "drop_all_tables",
    # Models
    "SessionModel",
    "MessageModel",
    "LocationMarkModel",
    # CRUD classes
    "BaseCRUD",
    "SessionCRUD",
    "MessageCRUD",
    "LocationCRUD",
    # CRUD singletons
    "session_crud",
    "message_crud",
    "location_crud",
]
