from pydantic import BaseModel, Field
from typing import Optional, Dict, Any


# Exercise Schemas
class ExerciseSummary(BaseModel):
    id: str
    name: str

    class Config:
        from_attributes = True


class ExerciseResponse(ExerciseSummary):
    code: str
    solution: str


class ExerciseSeed(BaseModel):
    """One entry of the seed file."""
    id: Optional[str] = None
    name: str
    code: str = ""
    solution: str


# =============================================================================
# Room transport schemas (routes/rooms.py)
# Wire keys keep their camelCase names via aliases.
# =============================================================================

class WireModel(BaseModel):
    class Config:
        populate_by_name = True


class InboundMessage(BaseModel):
    """Envelope of every frame received from a participant."""
    event: str
    data: Dict[str, Any] = {}


class JoinRoomPayload(WireModel):
    room_id: str = Field(alias="roomId", min_length=1)


class CodePayload(WireModel):
    """Payload of code-change and check-solution."""
    room_id: str = Field(alias="roomId", min_length=1)
    code: str


class Connected(WireModel):
    connection_id: str = Field(alias="connectionId")


class RoomInfo(WireModel):
    """Occupancy snapshot. student_id/is_mentor describe the connection that just joined."""
    student_id: Optional[str] = Field(default=None, alias="studentId")
    student_count: int = Field(alias="studentCount")
    is_mentor: Optional[bool] = Field(default=None, alias="isMentor")


class CodeUpdate(WireModel):
    code: str


class MentorLeft(WireModel):
    pass


class SolutionCorrect(WireModel):
    correct: bool = True


class ErrorMessage(WireModel):
    message: str
