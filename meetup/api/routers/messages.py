"""
Message API endpoints.

Routes:
- POST /messages - Post a chat message (creates the session on first use)
- GET /messages?sessionId= - Poll the session view (recent messages + fresh locations)

Dependencies: meetup.application.services, meetup.models
System role: Chat and polling HTTP API
"""

from fastapi import APIRouter, Depends, Query

from meetup.api.deps import get_session_engine
from meetup.application.services import SessionEngine
from meetup.models.common import SuccessResponse
from meetup.models.location import LocationMarkResponse
from meetup.models.message import MessageResponse, PostMessageRequest, SessionViewResponse

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", response_model=SuccessResponse)
async def post_message(
    request: PostMessageRequest,
    engine: SessionEngine = Depends(get_session_engine),
) -> SuccessResponse:
    """
    Post a chat message.

    If the body carries a location, the sender's location mark is refreshed
    as part of the same write.

    Raises:
        ValidationError (400): sessionId, sender.id or message missing
        StoreError (500): Persistence failed
    """
    await engine.post_message(
        session_id=request.session_id,
        sender=request.sender.to_participant() if request.sender else None,
        content=request.message,
        location=request.location.to_coordinates() if request.location else None,
    )
    return SuccessResponse()


@router.get("", response_model=SessionViewResponse)
async def get_session_view(
    session_id: str | None = Query(default=None, alias="sessionId"),
    engine: SessionEngine = Depends(get_session_engine),
) -> SessionViewResponse:
    """
    Poll the current view of a session.

    Always a full snapshot. Unknown sessions return empty lists.

    Raises:
        ValidationError (400): sessionId missing
        StoreError (500): Persistence failed
    """
    view = await engine.get_session_view(session_id)
    return SessionViewResponse(
        messages=[MessageResponse.model_validate(m) for m in view.messages],
        locations=[LocationMarkResponse.model_validate(loc) for loc in view.locations],
    )
