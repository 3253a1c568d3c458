"""
Location API endpoints.

Routes:
- POST /locations - Record the sender's current position

Dependencies: meetup.application.services, meetup.models
System role: Live location HTTP API
"""

from fastapi import APIRouter, Depends

from meetup.api.deps import get_session_engine
from meetup.application.services import SessionEngine
from meetup.models.common import SuccessResponse
from meetup.models.location import UpdateLocationRequest

router = APIRouter(prefix="/locations", tags=["locations"])


@router.post("", response_model=SuccessResponse)
async def update_location(
    request: UpdateLocationRequest,
    engine: SessionEngine = Depends(get_session_engine),
) -> SuccessResponse:
    """Overwrite the sender's location mark; sent on every geolocation update."""
    await engine.update_location(
        session_id=request.session_id,
        participant=request.sender.to_participant() if request.sender else None,
        location=request.location.to_coordinates() if request.location else None,
    )
    return SuccessResponse()
