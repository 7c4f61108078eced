"""Tests for conflict detection and notice countdowns."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date, datetime

from models.address import Address
from models.project import Project
from models.room import Room
from models.space import NoticeInterval, Space
from models.tenant import Tenant
from engine.conflicts import (
    days_remaining,
    is_overdue,
    detect_conflicts,
    detect_all_conflicts,
    group_conflicts_by_project,
)

NOW = datetime(2025, 3, 10, 12, 0)


def make_tenant(tid, first="Jan", last="Kowalski", space_id=None):
    return Tenant(tid, first, last, "male", 1990, date(2024, 1, 1), 500, space_id=space_id)


def make_notice(end):
    return NoticeInterval(date(2025, 1, 1), end, end)


def make_project(pid="p1", spaces=None, unassigned=None):
    room = Room("r1", "a1", "101", "male", len(spaces or []), spaces or [])
    address = Address("a1", pid, "Akademik", "ul. Testowa 1", total_spaces=10,
                      rooms=[room], unassigned_tenants=unassigned or [])
    return Project(pid, f"Project {pid}", addresses=[address])


class TestDaysRemaining:
    def test_future_rounds_up(self):
        # 11 March 00:00 is 12 hours away
        assert days_remaining(date(2025, 3, 11), NOW) == 1

    def test_today_is_zero(self):
        # midnight of today already passed: ceil(-0.5) == 0
        assert days_remaining(date(2025, 3, 10), NOW) == 0
        assert not is_overdue(date(2025, 3, 10), NOW)

    def test_past_is_negative(self):
        assert days_remaining(date(2025, 3, 8), NOW) == -2
        assert is_overdue(date(2025, 3, 8), NOW)

    def test_exact_midnight(self):
        assert days_remaining(date(2025, 3, 15), datetime(2025, 3, 10)) == 5


class TestDetectConflicts:
    def test_unassigned_tenant(self):
        project = make_project(unassigned=[make_tenant("t1", "Olga", "Kamińska")])
        conflicts = detect_conflicts(project, NOW)

        assert len(conflicts) == 1
        c = conflicts[0]
        assert c.conflict_type == "no_room"
        assert c.tenant_id == "t1"
        assert c.space_id is None
        assert c.message == "Określ pokój dla Olga Kamińska"
        assert c.address_name == "Akademik"

    def test_overdue_notice_with_tenant(self):
        tenant = make_tenant("t1", "Tomasz", "Lewandowski", space_id="s1")
        space = Space("s1", "r1", 1, tenant=tenant, notice=make_notice(date(2025, 3, 1)))
        conflicts = detect_conflicts(make_project(spaces=[space]), NOW)

        assert len(conflicts) == 1
        assert conflicts[0].conflict_type == "notice_overdue"
        assert conflicts[0].space_id == "s1"
        assert conflicts[0].message == "Zwolnij miejsce lub przenieś Tomasz Lewandowski"

    def test_running_notice_is_not_a_conflict(self):
        tenant = make_tenant("t1", space_id="s1")
        space = Space("s1", "r1", 1, tenant=tenant, notice=make_notice(date(2025, 3, 20)))
        assert detect_conflicts(make_project(spaces=[space]), NOW) == []

    def test_overdue_notice_without_tenant_is_not_a_conflict(self):
        space = Space("s1", "r1", 1, notice=make_notice(date(2025, 1, 15)))
        assert detect_conflicts(make_project(spaces=[space]), NOW) == []

    def test_placed_tenant_without_back_reference(self):
        space = Space("s1", "r1", 1, tenant=make_tenant("t1", space_id=None))
        conflicts = detect_conflicts(make_project(spaces=[space]), NOW)
        assert [(c.conflict_type, c.space_id) for c in conflicts] == [("no_room", "s1")]

    def test_unassigned_come_first(self):
        overdue = Space("s1", "r1", 1, tenant=make_tenant("t1", space_id="s1"),
                        notice=make_notice(date(2025, 2, 1)))
        project = make_project(spaces=[overdue], unassigned=[make_tenant("t2"), make_tenant("t3")])
        conflicts = detect_conflicts(project, NOW)

        assert [c.conflict_type for c in conflicts] == ["no_room", "no_room", "notice_overdue"]
        assert [c.tenant_id for c in conflicts] == ["t2", "t3", "t1"]

    def test_ids_are_fresh_but_keys_stable(self):
        project = make_project(unassigned=[make_tenant("t1")])
        first = detect_conflicts(project, NOW)
        second = detect_conflicts(project, NOW)

        assert first[0].id != second[0].id
        assert first[0].key == second[0].key


class TestAcrossProjects:
    def test_detect_all_and_group(self):
        p1 = make_project("p1", unassigned=[make_tenant("t1")])
        p2 = make_project("p2", unassigned=[make_tenant("t2"), make_tenant("t3")])
        p3 = make_project("p3")

        conflicts = detect_all_conflicts([p1, p2, p3], NOW)
        assert len(conflicts) == 3

        grouped = group_conflicts_by_project(conflicts)
        assert list(grouped.keys()) == ["p1", "p2"]
        assert len(grouped["p2"]) == 2


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
