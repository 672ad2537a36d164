"""
Connection Registry.

Tracks live participant connections and the rooms each one is in.
Room membership here decides who receives a room broadcast.
"""
import uuid
from typing import Dict, List, Set


class ConnectionRegistry:
    """In-memory map of connection id -> joined room ids."""

    def __init__(self):
        self.connections: Dict[str, Set[str]] = {}

    def on_connect(self) -> str:
        """Register a new connection and return its opaque id."""
        connection_id = uuid.uuid4().hex
        self.connections[connection_id] = set()
        return connection_id

    def on_disconnect(self, connection_id: str) -> None:
        self.connections.pop(connection_id, None)

    def is_connected(self, connection_id: str) -> bool:
        return connection_id in self.connections

    def track(self, connection_id: str, room_id: str) -> None:
        self.connections.setdefault(connection_id, set()).add(room_id)

    def untrack(self, connection_id: str, room_id: str) -> None:
        rooms = self.connections.get(connection_id)
        if rooms is not None:
            rooms.discard(room_id)

    def rooms_of(self, connection_id: str) -> List[str]:
        # Sorted so callers iterate deterministically
        return sorted(self.connections.get(connection_id, ()))

    def leave_all_rooms(self, connection_id: str) -> List[str]:
        """Untrack the connection from every room and return the rooms it left."""
        left = self.rooms_of(connection_id)
        if connection_id in self.connections:
            self.connections[connection_id].clear()
        return left

    def members(self, room_id: str) -> List[str]:
        return [cid for cid, rooms in self.connections.items() if room_id in rooms]

    def clear_room(self, room_id: str) -> List[str]:
        """Untrack every connection from a room; returns who was in it."""
        members = self.members(room_id)
        for cid in members:
            self.connections[cid].discard(room_id)
        return members
