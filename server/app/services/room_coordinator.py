"""
Room Coordinator.

Processes membership and edit events against the Room Table and the
Connection Registry. Every transition returns the messages it wants sent as
a list of `Outbound` records; the WebSocket layer performs the sends.
All table mutations happen before a transition returns, so an Outbound never
describes state that has not been applied yet.
"""
import logging
from dataclasses import dataclass
from typing import List, Tuple

from pydantic import BaseModel

from app.schemas import CodeUpdate, ErrorMessage, MentorLeft, RoomInfo, SolutionCorrect
from app.services import events
from app.services.connection_registry import ConnectionRegistry
from app.services.exercise_store import ExerciseStoreError, exercise_store
from app.services.room_table import RemovalEffect, Role, RoomTable
from app.services.solution_checker import SolutionChecker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outbound:
    recipients: Tuple[str, ...]
    event: str
    payload: BaseModel


class RoomCoordinator:
    def __init__(self, table: RoomTable, registry: ConnectionRegistry, checker: SolutionChecker):
        self.table = table
        self.registry = registry
        self.checker = checker

    def connect(self) -> str:
        connection_id = self.registry.on_connect()
        logger.info("Client connected: %s", connection_id)
        return connection_id

    def disconnect(self, connection_id: str) -> List[Outbound]:
        """Leave every room, then forget the connection."""
        outbound = self.leave(connection_id)
        self.registry.on_disconnect(connection_id)
        logger.info("Client disconnected: %s", connection_id)
        return outbound

    def join(self, connection_id: str, room_id: str) -> List[Outbound]:
        outbound: List[Outbound] = []

        # One room per connection: leave whatever else it was in first
        for previous in self.registry.rooms_of(connection_id):
            if previous != room_id:
                outbound.extend(self._leave_room(connection_id, previous))

        self.registry.track(connection_id, room_id)
        role = self.table.assign_role_on_join(room_id, connection_id)
        room = self.table.get(room_id)
        logger.info("Connection %s joined room %s as %s", connection_id, room_id, role.value)

        info = RoomInfo(
            student_id=connection_id,
            student_count=room.student_count,
            is_mentor=role is Role.MENTOR,
        )
        outbound.append(Outbound(self._members(room_id), events.ROOM_INFO, info))
        outbound.append(Outbound((connection_id,), events.CODE_UPDATE, CodeUpdate(code=room.current_code)))
        return outbound

    def change_code(self, connection_id: str, room_id: str, code: str) -> List[Outbound]:
        """Overwrite the room's code and relay it to everyone but the sender."""
        if not self.table.set_code(room_id, code):
            return []

        others = tuple(cid for cid in self._members(room_id) if cid != connection_id)
        if not others:
            return []
        return [Outbound(others, events.CODE_UPDATE, CodeUpdate(code=code))]

    async def check_solution(self, connection_id: str, room_id: str, code: str) -> List[Outbound]:
        """Tell the sender, and only the sender, when its code solves the exercise."""
        try:
            correct = await self.checker.is_correct(room_id, code)
        except ExerciseStoreError as e:
            logger.exception("Error checking solution for room %s", room_id)
            return [Outbound((connection_id,), events.ERROR, ErrorMessage(message=f"Could not check solution: {e}"))]

        # The room may have dissolved while the lookup was pending; the
        # signal is personal, so it still goes to the sender if it is connected
        if not correct or not self.registry.is_connected(connection_id):
            return []
        return [Outbound((connection_id,), events.SOLUTION_CORRECT, SolutionCorrect())]

    async def edit(self, connection_id: str, room_id: str, code: str) -> List[Outbound]:
        outbound = self.change_code(connection_id, room_id, code)
        outbound.extend(await self.check_solution(connection_id, room_id, code))
        return outbound

    def leave(self, connection_id: str) -> List[Outbound]:
        outbound: List[Outbound] = []
        for room_id in self.registry.leave_all_rooms(connection_id):
            outbound.extend(self._leave_room(connection_id, room_id))
        return outbound

    def _leave_room(self, connection_id: str, room_id: str) -> List[Outbound]:
        self.registry.untrack(connection_id, room_id)
        effect = self.table.remove_connection(room_id, connection_id)

        if effect is RemovalEffect.ROOM_DISSOLVED:
            orphans = tuple(self.registry.clear_room(room_id))
            logger.info("Mentor %s left, room %s dissolved (%d orphaned)", connection_id, room_id, len(orphans))
            if not orphans:
                return []
            return [Outbound(orphans, events.MENTOR_LEFT, MentorLeft())]

        if effect is RemovalEffect.STUDENT_REMOVED:
            room = self.table.get(room_id)
            members = self._members(room_id)
            if not members:
                return []
            return [Outbound(members, events.ROOM_INFO, RoomInfo(student_count=room.student_count))]

        return []

    def _members(self, room_id: str) -> Tuple[str, ...]:
        return tuple(self.registry.members(room_id))


# Global coordinator instance; process-wide, reset on restart
room_coordinator = RoomCoordinator(RoomTable(), ConnectionRegistry(), SolutionChecker(exercise_store))


def get_room_coordinator() -> RoomCoordinator:
    return room_coordinator
