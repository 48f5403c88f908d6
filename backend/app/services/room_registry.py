"""Chat room membership of realtime connections."""

from typing import Dict, Optional, Set


def room_for_chat(chat_id: str) -> str:
    """Broadcast scope name for a chat."""
    return f"chat_{chat_id}"


class RoomRegistry:
    """
    Track which rooms each realtime connection belongs to.

    Keyed by connection id (the Socket.IO sid). A reverse index keeps
    room -> members so collaborators can ask who a delivery reaches.
    """

    def __init__(self):
        self._rooms_by_sid: Dict[str, Set[str]] = {}
        self._members_by_room: Dict[str, Set[str]] = {}

    def connect(self, sid: str) -> None:
        """Register a connection with no memberships."""
        self._rooms_by_sid.setdefault(sid, set())

    def join(self, sid: str, room: str) -> bool:
        """Add sid to room. Returns False if it was already a member."""
        rooms = self._rooms_by_sid.setdefault(sid, set())
        if room in rooms:
            return False
        rooms.add(room)
        self._members_by_room.setdefault(room, set()).add(sid)
        return True

    def leave(self, sid: str, room: str) -> bool:
        """Remove sid from room. Returns False if it was not a member."""
        rooms = self._rooms_by_sid.get(sid)
        if not rooms or room not in rooms:
            return False
        rooms.discard(room)
        self._discard_member(room, sid)
        return True

    def disconnect(self, sid: str) -> Set[str]:
        """Forget a connection and every room it held. Returns those rooms."""
        rooms = self._rooms_by_sid.pop(sid, set())
        for room in rooms:
            self._discard_member(room, sid)
        return rooms

    def rooms_of(self, sid: str) -> Set[str]:
        return set(self._rooms_by_sid.get(sid, ()))

    def members_of(self, room: str) -> Set[str]:
        return set(self._members_by_room.get(room, ()))

    def is_member(self, sid: str, room: str) -> bool:
        return room in self._rooms_by_sid.get(sid, ())

    def is_connected(self, sid: str) -> bool:
        return sid in self._rooms_by_sid

    @property
    def connection_count(self) -> int:
        return len(self._rooms_by_sid)

    def _discard_member(self, room: str, sid: str) -> None:
        members: Optional[Set[str]] = self._members_by_room.get(room)
        if members is None:
            return
        members.discard(sid)
        if not members:
            del self._members_by_room[room]
