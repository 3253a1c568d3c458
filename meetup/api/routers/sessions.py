"""
Session API endpoints.

Routes:
- GET /sessions?sessionId= - Get session metadata (404 if absent)
- PUT /sessions - Rename session
- POST /sessions/resolve - Derive a session id from a meetup name

Dependencies: meetup.application.services, meetup.models
System role: Session management HTTP API
"""

from fastapi import APIRouter, Depends, Query

from meetup.api.deps import get_session_engine
from meetup.application.services import SessionEngine
from meetup.models.common import SuccessResponse
from meetup.models.session import (
    RenameSessionRequest,
    ResolveSessionRequest,
    ResolveSessionResponse,
    SessionResponse,
    SessionSchema,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("", response_model=SessionResponse)
async def get_session(
    session_id: str | None = Query(default=None, alias="sessionId"),
    engine: SessionEngine = Depends(get_session_engine),
) -> SessionResponse:
    """
    Get session metadata.

    Raises:
        ValidationError (400): sessionId missing
        SessionNotFoundError (404): Session does not exist
        StoreError (500): Persistence failed
    """
    session = await engine.get_session(session_id)
    return SessionResponse(session=SessionSchema.model_validate(session))


@router.put("", response_model=SuccessResponse)
async def rename_session(
    request: RenameSessionRequest,
    engine: SessionEngine = Depends(get_session_engine),
) -> SuccessResponse:
    """
    Rename a session.

    Succeeds even when no session has the given id.
    """
    await engine.rename_session(request.session_id, request.name)
    return SuccessResponse()


@router.post("/resolve", response_model=ResolveSessionResponse)
async def resolve_session(
    request: ResolveSessionRequest,
    engine: SessionEngine = Depends(get_session_engine),
) -> ResolveSessionResponse:
    """Turn a meetup name into the session id every participant will share."""
    return ResolveSessionResponse(session_id=engine.resolve_session_id(request.name))
