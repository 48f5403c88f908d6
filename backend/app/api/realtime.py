"""
Socket.IO gateway for chat room membership.

Clients connect on /socket.io and send:

    join_chat(chatId)   -> ack {"ok": true, "room": "chat_<chatId>"}
    leave_chat(chatId)  -> ack {"ok": true, "room": "chat_<chatId>"}

Invalid chat ids are ignored and acked with {"ok": false, "error": ...}.
Disconnecting drops every room the connection held.
"""

import logging
from typing import Any, Optional

import socketio

from app.config import Settings
from app.services.room_registry import RoomRegistry, room_for_chat

logger = logging.getLogger(__name__)

INVALID_CHAT_ID = {"ok": False, "error": "invalid chat id"}


def create_socket_server(settings: Settings) -> socketio.AsyncServer:
    """Socket.IO server trusting only the configured frontend origin."""
    return socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins=[settings.FRONTEND_URL],
        cors_credentials=True,
        logger=False,
        engineio_logger=False,
    )


def normalize_chat_id(value: Any) -> Optional[str]:
    """Return the chat id as a string, or None if it can't name a room."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class RealtimeGateway:
    """Bind join/leave/disconnect events to a RoomRegistry."""

    def __init__(self, sio, registry: Optional[RoomRegistry] = None):
        self.sio = sio
        self.registry = registry if registry is not None else RoomRegistry()

    def register(self) -> None:
        """Attach handlers to the Socket.IO server."""
        self.sio.on("connect", self.on_connect)
        self.sio.on("join_chat", self.join_chat)
        self.sio.on("leave_chat", self.leave_chat)
        self.sio.on("disconnect", self.on_disconnect)

    async def on_connect(self, sid: str, environ: dict, auth: Any = None):
        self.registry.connect(sid)
        logger.info(f"Client connected: {sid}")

    async def join_chat(self, sid: str, chat_id: Any = None) -> dict:
        normalized = normalize_chat_id(chat_id)
        if normalized is None:
            logger.warning(f"Socket {sid} sent invalid chat id to join_chat: {chat_id!r}")
            return INVALID_CHAT_ID

        room = room_for_chat(normalized)
        if self.registry.join(sid, room):
            await self.sio.enter_room(sid, room)
        logger.info(f"Socket {sid} joined {room}")
        return {"ok": True, "room": room}

    async def leave_chat(self, sid: str, chat_id: Any = None) -> dict:
        normalized = normalize_chat_id(chat_id)
        if normalized is None:
            logger.warning(f"Socket {sid} sent invalid chat id to leave_chat: {chat_id!r}")
            return INVALID_CHAT_ID

        room = room_for_chat(normalized)
        if self.registry.leave(sid, room):
            await self.sio.leave_room(sid, room)
        logger.info(f"Socket {sid} left {room}")
        return {"ok": True, "room": room}

    async def on_disconnect(self, sid: str, reason: Any = None):
        # Socket.IO drops the server-side rooms itself
        rooms = self.registry.disconnect(sid)
        logger.info(f"Client disconnected: {sid} (left {len(rooms)} rooms)")

    def chat_room(self, chat_id: Any) -> str:
        """Room name for a chat id, normalized the same way join/leave do."""
        normalized = normalize_chat_id(chat_id)
        if normalized is None:
            raise ValueError(f"Invalid chat id: {chat_id!r}")
        return room_for_chat(normalized)

    async def emit_to_chat(self, chat_id: Any, event: str, data: Any) -> int:
        """
        Deliver an event to everyone in a chat room. Returns member count.

        Raises ValueError for a chat id join_chat would also refuse.
        """
        room = self.chat_room(chat_id)
        await self.sio.emit(event, data, to=room)
        recipients = len(self.registry.members_of(room))
        logger.debug(f"Emitted {event} to {room} ({recipients} members)")
        return recipients
