from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from app.database import Base
import uuid


def new_exercise_id() -> str:
    return uuid.uuid4().hex


class Exercise(Base):
    """A named coding task with starter code and a canonical solution"""
    __tablename__ = "exercises"
    
    id = Column(String, primary_key=True, default=new_exercise_id)
    name = Column(String, nullable=False)
    code = Column(Text, nullable=False, default="")  # Starter code shown in the editor
    solution = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    
    def __repr__(self):
        return f"<Exercise {self.id} ({self.name})>"
