"""
Room Table: the authoritative in-memory map of room id -> room state.

A room id is the id of the exercise being worked on. Rooms are created
lazily by the first join and deleted when their mentor leaves.
"""
import enum
from typing import Dict, List, Optional, Set


class Role(str, enum.Enum):
    MENTOR = "mentor"
    STUDENT = "student"


class RemovalEffect(str, enum.Enum):
    ROOM_DISSOLVED = "room_dissolved"
    STUDENT_REMOVED = "student_removed"
    NO_CHANGE = "no_change"


class Room:
    """State of one collaborative session."""

    def __init__(self, room_id: str):
        self.room_id = room_id
        self.mentor: Optional[str] = None
        self.students: Set[str] = set()
        self.current_code: str = ""

    @property
    def student_count(self) -> int:
        return len(self.students)

    def role_of(self, connection_id: str) -> Optional[Role]:
        if connection_id == self.mentor:
            return Role.MENTOR
        if connection_id in self.students:
            return Role.STUDENT
        return None

    def __repr__(self):
        return f"<Room {self.room_id} mentor={self.mentor} students={len(self.students)}>"


class RoomTable:
    def __init__(self):
        self.rooms: Dict[str, Room] = {}

    def __contains__(self, room_id: str) -> bool:
        return room_id in self.rooms

    def __len__(self) -> int:
        return len(self.rooms)

    def get(self, room_id: str) -> Optional[Room]:
        return self.rooms.get(room_id)

    def room_ids(self) -> List[str]:
        return list(self.rooms)

    def ensure_room(self, room_id: str) -> Room:
        room = self.rooms.get(room_id)
        if room is None:
            room = self.rooms[room_id] = Room(room_id)
        return room

    def assign_role_on_join(self, room_id: str, connection_id: str) -> Role:
        """First joiner becomes mentor, everyone after is a student. Rejoining keeps the role."""
        room = self.ensure_room(room_id)
        existing = room.role_of(connection_id)
        if existing is not None:
            return existing

        if room.mentor is None:
            room.mentor = connection_id
            return Role.MENTOR

        room.students.add(connection_id)
        return Role.STUDENT

    def set_code(self, room_id: str, code: str) -> bool:
        """Overwrite the shared buffer. Returns False if the room does not exist."""
        room = self.rooms.get(room_id)
        if room is None:
            return False
        room.current_code = code
        return True

    def remove_connection(self, room_id: str, connection_id: str) -> RemovalEffect:
        room = self.rooms.get(room_id)
        if room is None:
            return RemovalEffect.NO_CHANGE

        if room.mentor == connection_id:
            del self.rooms[room_id]
            return RemovalEffect.ROOM_DISSOLVED

        if connection_id in room.students:
            room.students.discard(connection_id)
            return RemovalEffect.STUDENT_REMOVED

        return RemovalEffect.NO_CHANGE
