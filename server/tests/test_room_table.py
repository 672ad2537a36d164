"""Tests for the Room Table and the Connection Registry."""

from app.services.connection_registry import ConnectionRegistry
from app.services.room_table import RemovalEffect, Role, RoomTable


class TestRoomTable:
    def test_ensure_room_creates_empty_room(self):
        table = RoomTable()
        room = table.ensure_room("r1")
        assert room.mentor is None
        assert room.students == set()
        assert room.current_code == ""
        assert table.ensure_room("r1") is room

    def test_first_joiner_is_mentor_rest_are_students(self):
        table = RoomTable()
        assert table.assign_role_on_join("r1", "a") is Role.MENTOR
        assert table.assign_role_on_join("r1", "b") is Role.STUDENT
        assert table.assign_role_on_join("r1", "c") is Role.STUDENT
        room = table.get("r1")
        assert room.mentor == "a"
        assert room.students == {"b", "c"}

    def test_rejoin_is_idempotent(self):
        table = RoomTable()
        table.assign_role_on_join("r1", "a")
        table.assign_role_on_join("r1", "b")
        assert table.assign_role_on_join("r1", "a") is Role.MENTOR
        assert table.assign_role_on_join("r1", "b") is Role.STUDENT
        room = table.get("r1")
        assert room.student_count == 1
        assert "a" not in room.students

    def test_set_code_on_missing_room_is_noop(self):
        table = RoomTable()
        assert table.set_code("nope", "x") is False
        assert "nope" not in table

    def test_set_code_overwrites(self):
        table = RoomTable()
        table.ensure_room("r1")
        table.set_code("r1", "one")
        table.set_code("r1", "two")
        assert table.get("r1").current_code == "two"

    def test_mentor_removal_dissolves_room(self):
        table = RoomTable()
        table.assign_role_on_join("r1", "a")
        table.assign_role_on_join("r1", "b")
        assert table.remove_connection("r1", "a") is RemovalEffect.ROOM_DISSOLVED
        assert "r1" not in table

    def test_student_removal(self):
        table = RoomTable()
        table.assign_role_on_join("r1", "a")
        table.assign_role_on_join("r1", "b")
        assert table.remove_connection("r1", "b") is RemovalEffect.STUDENT_REMOVED
        assert table.get("r1").student_count == 0
        assert table.get("r1").mentor == "a"

    def test_unknown_connection_or_room_is_no_change(self):
        table = RoomTable()
        table.assign_role_on_join("r1", "a")
        assert table.remove_connection("r1", "zzz") is RemovalEffect.NO_CHANGE
        assert table.remove_connection("r2", "a") is RemovalEffect.NO_CHANGE


class TestConnectionRegistry:
    def test_connect_assigns_unique_ids(self):
        registry = ConnectionRegistry()
        ids = {registry.on_connect() for _ in range(20)}
        assert len(ids) == 20
        assert all(registry.is_connected(cid) for cid in ids)

    def test_members_and_leave_all_rooms(self):
        registry = ConnectionRegistry()
        a, b = registry.on_connect(), registry.on_connect()
        registry.track(a, "r1")
        registry.track(a, "r2")
        registry.track(b, "r1")
        assert sorted(registry.members("r1")) == sorted([a, b])
        assert registry.leave_all_rooms(a) == ["r1", "r2"]
        assert registry.members("r1") == [b]
        assert registry.rooms_of(a) == []

    def test_clear_room(self):
        registry = ConnectionRegistry()
        a, b = registry.on_connect(), registry.on_connect()
        registry.track(a, "r1")
        registry.track(b, "r1")
        registry.track(b, "r2")
        assert sorted(registry.clear_room("r1")) == sorted([a, b])
        assert registry.members("r1") == []
        assert registry.rooms_of(b) == ["r2"]

    def test_disconnect_forgets_connection(self):
        registry = ConnectionRegistry()
        a = registry.on_connect()
        registry.track(a, "r1")
        registry.on_disconnect(a)
        assert not registry.is_connected(a)
        assert registry.members("r1") == []
