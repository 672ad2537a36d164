"""
Exercise Store.

Read-mostly catalog of coding exercises backed by SQLAlchemy.
The room engine only ever calls `aget_by_id`.
"""
import logging
from typing import Iterable, List, Optional

import yaml
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from app.database import SessionLocal
from app.models.exercise import Exercise
from app.schemas import ExerciseSeed

logger = logging.getLogger(__name__)


class ExerciseStoreError(Exception):
    """The backing database could not be read or written."""


def _build(exercise_id, name, code, solution) -> Exercise:
    exercise = Exercise(name=name, code=code, solution=solution)
    if exercise_id:
        exercise.id = exercise_id
    return exercise


class ExerciseStore:
    """Catalog of exercises addressable by id."""

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def list_exercises(self) -> List[Exercise]:
        try:
            with self.session_factory() as session:
                return list(session.scalars(select(Exercise).order_by(Exercise.name, Exercise.id)))
        except SQLAlchemyError as e:
            raise ExerciseStoreError(str(e)) from e

    def get_by_id(self, exercise_id: str) -> Optional[Exercise]:
        """Return the exercise or None when no such id exists."""
        try:
            with self.session_factory() as session:
                return session.get(Exercise, exercise_id)
        except SQLAlchemyError as e:
            raise ExerciseStoreError(str(e)) from e

    async def aget_by_id(self, exercise_id: str) -> Optional[Exercise]:
        # Keep the event loop free while the database is queried
        return await run_in_threadpool(self.get_by_id, exercise_id)

    def count(self) -> int:
        try:
            with self.session_factory() as session:
                return session.scalar(select(func.count()).select_from(Exercise))
        except SQLAlchemyError as e:
            raise ExerciseStoreError(str(e)) from e

    def add(self, name: str, code: str, solution: str, exercise_id: Optional[str] = None) -> Exercise:
        exercise = _build(exercise_id, name, code, solution)
        try:
            with self.session_factory() as session:
                session.add(exercise)
                session.commit()
                session.refresh(exercise)
                return exercise
        except SQLAlchemyError as e:
            raise ExerciseStoreError(str(e)) from e

    def seed(self, records: Iterable[ExerciseSeed]) -> int:
        """Insert records only if the catalog is empty. Returns how many were inserted."""
        if self.count() > 0:
            return 0

        records = list(records)
        try:
            with self.session_factory() as session:
                session.add_all(_build(r.id, r.name, r.code, r.solution) for r in records)
                session.commit()
        except SQLAlchemyError as e:
            raise ExerciseStoreError(str(e)) from e

        logger.info("Catalog initialized with %d exercises", len(records))
        return len(records)


def load_seed_file(path: str) -> List[ExerciseSeed]:
    """Read exercise seeds from a YAML file with a top-level `exercises` list."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return [ExerciseSeed(**item) for item in data.get("exercises", [])]


# Global store instance
exercise_store = ExerciseStore()


def get_exercise_store() -> ExerciseStore:
    return exercise_store
