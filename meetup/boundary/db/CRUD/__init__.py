"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from meetup.boundary.db.CRUD import session_crud, message_crud, location_crud

    # Use singleton instances
    created = await session_crud.ensure(db, "friday-drinks")
"""

from meetup.boundary.db.CRUD.base_crud import BaseCRUD
from meetup.boundary.db.CRUD.session_crud import SessionCRUD, session_crud
from meetup.boundary.db.CRUD.message_crud import MessageCRUD, message_crud
from meetup.boundary.db.CRUD.location_crud import LocationCRUD, location_crud

__all__ = [
    "BaseCRUD",
    "SessionCRUD",
    "session_crud",
    "MessageCRUD",
    "message_crud",
    "LocationCRUD",
    "location_crud",
]
