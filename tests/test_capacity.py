"""Tests for project/address/room/space management and capacity limits."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date

import pytest

from models.address import Address
from engine.assignment import add_tenant, select_tenant_for_room
from engine.capacity import (
    add_project,
    update_project,
    delete_project,
    add_address,
    update_address,
    delete_address,
    capacity_summary,
    add_room,
    generate_rooms,
    resize_room,
    update_room,
    delete_room,
    delete_space,
)
from engine.errors import (
    NotFoundError,
    CapacityExceededError,
    SpacesOccupiedError,
    RoomOccupiedError,
    SpaceNotVacantError,
)
from engine.notice import put_on_notice


def make_address(total=10):
    return Address("a1", "p1", "Akademik", "ul. Testowa 1", total_spaces=total)


def place(address, room):
    tenant = add_tenant(address, "Jan", "Kowalski", "male", 1990, date(2024, 1, 1), 500)
    return select_tenant_for_room(address, room, tenant)


class TestProjects:
    def test_add_update_delete(self):
        projects = []
        project = add_project(projects, " Alpha ", "Warszawa")
        assert project.name == "Alpha"
        assert projects == [project]

        update_project(projects, project.id, name="Beta", city="")
        assert project.name == "Beta"
        assert project.city is None

        delete_project(projects, project.id)
        assert projects == []

    def test_delete_unknown(self):
        with pytest.raises(NotFoundError):
            delete_project([], "missing")


class TestAddresses:
    def test_add_with_details(self):
        projects = []
        project = add_project(projects, "Alpha")
        address = add_address(project, "Akademik", "ul. Centralna 15", 20,
                              operator="other", operator_name="Hostel Sp. z o.o.", total_cost=10000)
        assert address.project_id == project.id
        assert address.eviction_period == 14
        assert address.operator_display_name == "Hostel Sp. z o.o."
        assert project.addresses == [address]

    def test_unknown_field_rejected(self):
        project = add_project([], "Alpha")
        with pytest.raises(ValueError):
            add_address(project, "A", "B", 5, colour="red")
        assert project.addresses == []

    def test_unknown_operator_rejected(self):
        project = add_project([], "Alpha")
        with pytest.raises(ValueError):
            add_address(project, "A", "B", 5, operator="acme")

    def test_update_cannot_shrink_below_rooms(self):
        address = make_address(10)
        add_room(address, "101", "male", 6)
        with pytest.raises(CapacityExceededError):
            update_address(address, total_spaces=5)
        assert address.total_spaces == 10

        update_address(address, total_spaces=6, phone="+48 111")
        assert address.total_spaces == 6
        assert address.phone == "+48 111"

    def test_delete_address_cascades(self):
        project = add_project([], "Alpha")
        address = add_address(project, "A", "B", 5)
        add_tenant(address, "Jan", "Kowalski", "male", 1990, date(2024, 1, 1), 500)
        delete_address(project, address.id)
        assert project.addresses == []

    def test_capacity_summary(self):
        address = make_address(10)
        add_room(address, "101", "male", 4)
        assert capacity_summary(address) == {"total": 10, "allocated": 4, "remaining": 6}

    def test_non_positive_eviction_period_rejected(self):
        project = add_project([], "Alpha")
        with pytest.raises(ValueError):
            add_address(project, "A", "B", 5, eviction_period=0)
        assert project.addresses == []

        address = make_address(10)
        with pytest.raises(ValueError):
            update_address(address, eviction_period=-30)
        assert address.eviction_period == 14

        update_address(address, eviction_period=30)
        assert address.eviction_period == 30


class TestAddRoom:
    def test_spaces_numbered_from_one(self):
        address = make_address()
        room = add_room(address, "101", "female", 3)
        assert [s.number for s in room.spaces] == [1, 2, 3]
        assert all(s.status == "vacant" and s.room_id == room.id for s in room.spaces)

    def test_exceeding_capacity(self):
        address = make_address(5)
        add_room(address, "101", "male", 4)
        with pytest.raises(CapacityExceededError) as exc:
            add_room(address, "102", "male", 2)
        assert exc.value.over_limit == 1
        assert len(address.rooms) == 1

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            add_room(make_address(), "101", "mixed", 1)

    def test_generate_rooms(self):
        address = make_address()
        add_room(address, "101", "male", 2)
        rooms = generate_rooms(address, 2)
        assert [r.name for r in rooms] == ["Pokój 2", "Pokój 3"]
        assert all(r.total_spaces == 0 and r.spaces == [] for r in rooms)


class TestResizeRoom:
    def test_grow(self):
        address = make_address(10)
        room = add_room(address, "101", "male", 2)
        resize_room(room, 4, 10, 0)
        assert [s.number for s in room.spaces] == [1, 2, 3, 4]
        assert room.total_spaces == 4

    def test_grow_after_gap_keeps_numbers_unique(self):
        address = make_address(10)
        room = add_room(address, "101", "male", 3)
        delete_space(room, room.spaces[1].id)
        resize_room(room, 3, 10, 0)
        assert [s.number for s in room.spaces] == [1, 3, 4]

    def test_shrink_removes_highest_vacant(self):
        address = make_address(10)
        room = add_room(address, "101", "male", 4)
        occupied = place(address, room)
        resize_room(room, 2, 10, 0)
        assert [s.number for s in room.spaces] == [1, 2]
        assert occupied in room.spaces

    def test_shrink_skips_noticed_high_space(self):
        address = make_address(10)
        room = add_room(address, "101", "male", 3)
        put_on_notice(room.spaces[2], 14, date(2025, 1, 1))
        resize_room(room, 2, 10, 0)
        assert [s.number for s in room.spaces] == [1, 3]

    def test_shrink_fails_when_not_enough_vacant(self):
        address = make_address(10)
        room = add_room(address, "101", "male", 2)
        place(address, room)
        place(address, room)
        with pytest.raises(SpacesOccupiedError) as exc:
            resize_room(room, 1, 10, 0)
        assert exc.value.unfreed == 1
        assert len(room.spaces) == 2
        assert room.total_spaces == 2

    def test_grow_over_capacity(self):
        address = make_address(5)
        room = add_room(address, "101", "male", 2)
        with pytest.raises(CapacityExceededError):
            resize_room(room, 4, 5, 3)
        assert len(room.spaces) == 2

    def test_update_room(self):
        address = make_address(10)
        other = add_room(address, "101", "male", 6)
        room = add_room(address, "102", "male", 2)

        with pytest.raises(CapacityExceededError):
            update_room(address, room.id, total_spaces=5)

        update_room(address, room.id, name="102A", room_type="couple", total_spaces=4)
        assert room.name == "102A"
        assert room.room_type == "couple"
        assert len(room.spaces) == 4
        assert other.total_spaces == 6

    def test_update_room_empty_name(self):
        address = make_address()
        room = add_room(address, "101", "male", 1)
        with pytest.raises(ValueError):
            update_room(address, room.id, name="  ")


class TestDeleteRoomAndSpace:
    def test_delete_empty_room(self):
        address = make_address()
        room = add_room(address, "101", "male", 2)
        delete_room(address, room.id)
        assert address.rooms == []

    def test_room_with_tenant(self):
        address = make_address()
        room = add_room(address, "101", "male", 2)
        place(address, room)
        with pytest.raises(RoomOccupiedError):
            delete_room(address, room.id)
        assert address.rooms == [room]

    def test_delete_vacant_space(self):
        address = make_address()
        room = add_room(address, "101", "male", 2)
        delete_space(room, room.spaces[0].id)
        assert [s.number for s in room.spaces] == [2]
        assert room.total_spaces == 1

    def test_delete_non_vacant_space(self):
        address = make_address()
        room = add_room(address, "101", "male", 2)
        occupied = place(address, room)
        put_on_notice(room.spaces[1], 14, date(2025, 1, 1))

        with pytest.raises(SpaceNotVacantError):
            delete_space(room, occupied.id)
        with pytest.raises(SpaceNotVacantError):
            delete_space(room, room.spaces[1].id)
        assert len(room.spaces) == 2


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
