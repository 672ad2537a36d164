"""Shared fixtures. The app is pointed at an in-memory database before import."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CLIENT_DIST_DIR"] = os.path.join(os.path.dirname(__file__), "no-client-build")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.database import init_db, make_engine
from app.main import app
from app.routes.rooms import get_ws_manager
from app.services.connection_registry import ConnectionRegistry
from app.services.exercise_store import ExerciseStore, ExerciseStoreError, exercise_store
from app.services.room_coordinator import RoomCoordinator, get_room_coordinator
from app.services.room_table import RoomTable
from app.services.solution_checker import SolutionChecker
from app.services.ws_manager import WebSocketManager


class FakeExerciseStore:
    """Stands in for the database; solutions keyed by exercise id."""

    def __init__(self, solutions=None, fail=False):
        self.solutions = solutions or {}
        self.fail = fail
        self.lookups = []

    async def aget_by_id(self, exercise_id):
        self.lookups.append(exercise_id)
        if self.fail:
            raise ExerciseStoreError("database is locked")
        if exercise_id not in self.solutions:
            return None
        return SimpleNamespace(id=exercise_id, solution=self.solutions[exercise_id])


@pytest.fixture
def fake_store():
    return FakeExerciseStore({"ex1": "const x = 1;\nreturn x;"})


@pytest.fixture
def coordinator(fake_store):
    return RoomCoordinator(RoomTable(), ConnectionRegistry(), SolutionChecker(fake_store))


@pytest.fixture
def memory_store():
    """A real ExerciseStore on its own empty in-memory database."""
    engine = make_engine("sqlite://")
    init_db(bind=engine)
    yield ExerciseStore(sessionmaker(bind=engine, autocommit=False, autoflush=False))
    engine.dispose()


@pytest.fixture
def client():
    fresh = RoomCoordinator(RoomTable(), ConnectionRegistry(), SolutionChecker(exercise_store))
    manager = WebSocketManager()
    app.dependency_overrides[get_room_coordinator] = lambda: fresh
    app.dependency_overrides[get_ws_manager] = lambda: manager
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
