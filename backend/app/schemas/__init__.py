"""Pydantic schemas for request/response validation."""

from app.schemas.message import RoomEvent, RoomEventResponse, DELIVERABLE_EVENTS

__all__ = [
    "RoomEvent",
    "RoomEventResponse",
    "DELIVERABLE_EVENTS",
]
