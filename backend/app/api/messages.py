"""Message routes. Delivery into chat rooms goes through the realtime gateway."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from app.api.realtime import RealtimeGateway
from app.schemas import RoomEvent, RoomEventResponse

router = APIRouter(tags=["Messages"])


def get_gateway(request: Request) -> RealtimeGateway:
    """Dependency returning the app's realtime gateway."""
    return request.app.state.gateway


@router.post(
    "/{chat_id}/events",
    response_model=RoomEventResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def deliver_to_chat(
    chat_id: str,
    payload: RoomEvent,
    gateway: RealtimeGateway = Depends(get_gateway)
):
    """
    Emit a message event to every connection that joined the chat's room.

    - **event**: `new_message` (default), `message_updated` or `message_deleted`
    - **data**: Arbitrary JSON payload forwarded as-is
    """
    try:
        room = gateway.chat_room(chat_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    recipients = await gateway.emit_to_chat(chat_id, payload.event, payload.data)
    return RoomEventResponse(room=room, event=payload.event, recipients=recipients)
