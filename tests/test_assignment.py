"""Tests for tenant registration, placement and check-out."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date, datetime

import pytest

from models.address import Address
from models.project import Project
from engine.assignment import (
    find_tenant,
    add_tenant,
    select_tenant_for_room,
    delete_tenant,
    check_out_tenant,
    tenant_sections,
    suggest_tenants_for_room,
)
from engine.capacity import add_room
from engine.errors import NotFoundError
from engine.notice import put_on_notice
from engine.stats import compute_address_stats


def make_address(total=10):
    return Address("a1", "p1", "Akademik Centrum", "ul. Centralna 15", total_spaces=total)


def make_project(address):
    return Project("p1", "Project Alpha", addresses=[address])


def register(address, first="Jan", last="Kowalski", gender="male"):
    return add_tenant(address, first, last, gender, 1990, date(2024, 1, 15), 500)


class TestAddTenant:
    def test_registers_unassigned(self):
        address = make_address()
        tenant = register(address, "  Anna ", "Kowalska ", "female")

        assert tenant.first_name == "Anna"
        assert tenant.last_name == "Kowalska"
        assert tenant.space_id is None
        assert address.unassigned_tenants == [tenant]

    def test_ids_unique(self):
        address = make_address()
        ids = {register(address).id for _ in range(5)}
        assert len(ids) == 5


class TestSelectTenantForRoom:
    def test_places_in_lowest_free_space(self):
        address = make_address()
        room = add_room(address, "101", "male", 3)
        first = register(address, "Jan")
        second = register(address, "Piotr")

        s1 = select_tenant_for_room(address, room, first)
        s2 = select_tenant_for_room(address, room, second)

        assert (s1.number, s2.number) == (1, 2)
        assert first.space_id == s1.id
        assert s1.status == "occupied"
        assert address.unassigned_tenants == []

    def test_full_room_returns_none_and_changes_nothing(self):
        address = make_address()
        room = add_room(address, "101", "male", 1)
        select_tenant_for_room(address, room, register(address, "Jan"))
        waiting = register(address, "Piotr")

        assert select_tenant_for_room(address, room, waiting) is None
        assert waiting in address.unassigned_tenants
        assert waiting.space_id is None

    def test_move_between_rooms_frees_old_space(self):
        address = make_address()
        room_a = add_room(address, "101", "male", 2)
        room_b = add_room(address, "102", "male", 2)
        tenant = register(address)

        old = select_tenant_for_room(address, room_a, tenant)
        new = select_tenant_for_room(address, room_b, tenant)

        assert old.tenant is None
        assert old.status == "vacant"
        assert new.tenant is tenant
        assert tenant.space_id == new.id
        assert compute_address_stats(address).people_count == 1

    def test_reselecting_same_room_keeps_tenant_in_place(self):
        address = make_address()
        room = add_room(address, "101", "male", 1)
        tenant = register(address)
        first = select_tenant_for_room(address, room, tenant)

        again = select_tenant_for_room(address, room, tenant)
        assert again is first
        assert room.tenant_count == 1

    def test_moving_off_notice_space_leaves_notice(self):
        address = make_address()
        room_a = add_room(address, "101", "male", 1)
        room_b = add_room(address, "102", "male", 1)
        tenant = register(address)
        old = select_tenant_for_room(address, room_a, tenant)
        put_on_notice(old, 14, date(2025, 1, 1))

        select_tenant_for_room(address, room_b, tenant)
        assert old.tenant is None
        assert old.status == "notice"

    def test_vacant_on_notice_space_keeps_interval(self):
        address = make_address()
        room = add_room(address, "101", "male", 1)
        put_on_notice(room.spaces[0], 14, date(2025, 1, 1))
        tenant = register(address)

        space = select_tenant_for_room(address, room, tenant)
        assert space.tenant is tenant
        assert space.notice is not None
        assert space.status == "notice"

    def test_room_of_other_address(self):
        address = make_address()
        other = Address("a2", "p1", "Other", "ul. Inna 2", total_spaces=5)
        room = add_room(other, "201", "male", 1)
        with pytest.raises(NotFoundError):
            select_tenant_for_room(address, room, register(address))

    def test_gender_mismatch_is_allowed(self):
        address = make_address()
        room = add_room(address, "101", "female", 1)
        space = select_tenant_for_room(address, room, register(address, gender="male"))
        assert space is not None


class TestDeleteTenant:
    def test_delete_unassigned(self):
        address = make_address()
        tenant = register(address)
        delete_tenant(address, tenant.id)
        assert address.unassigned_tenants == []

    def test_delete_placed_keeps_notice(self):
        address = make_address()
        room = add_room(address, "101", "male", 1)
        space = select_tenant_for_room(address, room, register(address))
        put_on_notice(space, 14, date(2025, 1, 1))

        delete_tenant(address, space.tenant.id)
        assert space.tenant is None
        assert space.status == "notice"

    def test_unknown_tenant(self):
        with pytest.raises(NotFoundError):
            delete_tenant(make_address(), "missing")


class TestCheckOutTenant:
    def test_checkout_placed_tenant(self):
        address = make_address()
        project = make_project(address)
        room = add_room(address, "101", "female", 2)
        tenant = register(address, "Anna", "Kowalska", "female")
        space = select_tenant_for_room(address, room, tenant)
        put_on_notice(space, 14, date(2025, 1, 1))
        now = datetime(2025, 2, 1, 9, 30)

        entry = check_out_tenant(project, address, tenant.id, date(2025, 1, 31), "job_change", now)

        assert entry.tenant_id == tenant.id
        assert entry.first_name == "Anna"
        assert entry.project_name == "Project Alpha"
        assert entry.address_name == "Akademik Centrum"
        assert entry.room_name == "101"
        assert entry.check_in_date == date(2024, 1, 15)
        assert entry.check_out_date == date(2025, 1, 31)
        assert entry.created_at == now
        assert space.tenant is None
        assert space.notice is None
        assert space.status == "vacant"

    def test_checkout_unassigned_tenant(self):
        address = make_address()
        tenant = register(address)
        entry = check_out_tenant(make_project(address), address, tenant.id, date(2025, 1, 31), "relocation")

        assert entry.room_name is None
        assert address.unassigned_tenants == []

    def test_unknown_reason_changes_nothing(self):
        address = make_address()
        tenant = register(address)
        with pytest.raises(ValueError):
            check_out_tenant(make_project(address), address, tenant.id, date(2025, 1, 31), "bored")
        assert address.unassigned_tenants == [tenant]

    def test_address_not_in_project(self):
        address = make_address()
        tenant = register(address)
        with pytest.raises(NotFoundError):
            check_out_tenant(Project("p2", "Other"), address, tenant.id, date(2025, 1, 31), "job_change")


class TestSectionsAndSuggestions:
    def test_sections(self):
        address = make_address()
        room = add_room(address, "101", "male", 2)
        placed = register(address, "Jan")
        waiting = register(address, "Piotr")
        select_tenant_for_room(address, room, placed)

        sections = tenant_sections(address)
        assert [s["title"] for s in sections] == ["Bez pokoju", "Już zakwaterowani"]
        assert sections[0]["data"] == [{"tenant": waiting, "room_name": None}]
        assert sections[1]["data"] == [{"tenant": placed, "room_name": "101"}]

    def test_find_tenant(self):
        address = make_address()
        room = add_room(address, "101", "male", 1)
        tenant = register(address)
        assert find_tenant(address, tenant.id) == (tenant, None)
        space = select_tenant_for_room(address, room, tenant)
        assert find_tenant(address, tenant.id) == (tenant, space)
        assert find_tenant(address, "missing") == (None, None)

    def test_matching_gender_first(self):
        address = make_address()
        room = add_room(address, "101", "female", 2)
        man = register(address, "Jan", gender="male")
        woman = register(address, "Anna", gender="female")

        assert suggest_tenants_for_room(address, room) == [woman, man]

    def test_couple_room_keeps_order(self):
        address = make_address()
        room = add_room(address, "101", "couple", 2)
        man = register(address, "Jan", gender="male")
        woman = register(address, "Anna", gender="female")

        assert suggest_tenants_for_room(address, room) == [man, woman]

    def test_excludes_tenants_already_in_room(self):
        address = make_address()
        room = add_room(address, "101", "male", 2)
        inside = register(address)
        select_tenant_for_room(address, room, inside)
        assert suggest_tenants_for_room(address, room) == []


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
