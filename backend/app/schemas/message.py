"""Message delivery Pydantic schemas."""

from pydantic import BaseModel, Field, validator
from typing import Any

# Message lifecycle events clients listen for in a chat room
DELIVERABLE_EVENTS = {"new_message", "message_updated", "message_deleted"}


class RoomEvent(BaseModel):
    """A message event to deliver to every member of a chat room."""
    event: str = Field("new_message", min_length=1, max_length=100)
    data: Any = None

    @validator('event')
    def event_deliverable(cls, v):
        if v not in DELIVERABLE_EVENTS:
            allowed = ", ".join(sorted(DELIVERABLE_EVENTS))
            raise ValueError(f'Event must be one of: {allowed}')
        return v


class RoomEventResponse(BaseModel):
    """Result of a room delivery."""
    room: str
    event: str
    recipients: int
