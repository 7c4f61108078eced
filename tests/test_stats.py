"""Tests for occupancy statistics."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date

from models.address import Address
from models.project import Project
from models.room import Room
from models.space import NoticeInterval, Space
from models.tenant import Tenant
from engine.stats import (
    compute_space_stats,
    compute_address_stats,
    compute_project_stats,
    compute_portfolio_stats,
    occupancy_percent,
    address_tenant_count,
    address_breakdown,
    addresses_with_vacancies,
    addresses_with_occupants,
    collect_operators,
)
from models.stats import SpaceStats


def make_tenant(tid="t1", gender="male", space_id="s1"):
    return Tenant(tid, "Jan", "Kowalski", gender, 1990, date(2024, 1, 1), 500, space_id=space_id)


def make_notice(end=date(2099, 1, 1)):
    return NoticeInterval(date(2024, 1, 1), end, end)


def make_space(sid, number, tenant=None, notice=None):
    return Space(sid, "r1", number, tenant=tenant, notice=notice)


def make_address(aid="a1", spaces=None, operator=None, total_cost=0.0, unassigned=None):
    spaces = spaces or []
    room = Room("r1", aid, "101", "male", len(spaces), spaces)
    return Address(aid, "p1", f"Address {aid}", "ul. Testowa 1", total_spaces=len(spaces),
                   rooms=[room], operator=operator, total_cost=total_cost,
                   unassigned_tenants=unassigned or [])


def make_project(addresses):
    return Project("p1", "Project Alpha", addresses=addresses)


class TestComputeSpaceStats:
    def test_counts_each_status(self):
        spaces = [
            make_space("s1", 1, tenant=make_tenant("t1", space_id="s1")),
            make_space("s2", 2),
            make_space("s3", 3, tenant=make_tenant("t3", space_id="s3"), notice=make_notice()),
            make_space("s4", 4, notice=make_notice()),
        ]
        stats = compute_space_stats(spaces)

        assert stats.total == 4
        assert stats.occupied == 1
        assert stats.vacant == 1
        assert stats.notice == 2
        assert stats.occupied + stats.vacant + stats.notice == stats.total

    def test_people_counts_tenants_on_notice(self):
        spaces = [
            make_space("s1", 1, tenant=make_tenant("t1", space_id="s1"), notice=make_notice()),
            make_space("s2", 2, notice=make_notice()),
        ]
        stats = compute_space_stats(spaces)
        assert stats.people_count == 1
        assert stats.notice == 2

    def test_empty(self):
        stats = compute_space_stats([])
        assert stats == SpaceStats()


class TestOccupancyPercent:
    def test_zero_total(self):
        assert occupancy_percent(SpaceStats()) == 0

    def test_occupied_plus_notice(self):
        assert occupancy_percent(SpaceStats(total=4, occupied=2, vacant=1, notice=1)) == 75

    def test_rounds_half_up(self):
        # 1/8 = 12.5%
        assert occupancy_percent(SpaceStats(total=8, occupied=1, vacant=7)) == 13

    def test_one_third(self):
        assert occupancy_percent(SpaceStats(total=3, occupied=1, vacant=2)) == 33


class TestProjectStats:
    def test_aggregates_addresses(self):
        a1 = make_address("a1", [make_space("s1", 1, tenant=make_tenant("t1", space_id="s1")),
                                 make_space("s2", 2)])
        a2 = make_address("a2", [make_space("s3", 1, notice=make_notice())])
        stats = compute_project_stats(make_project([a1, a2]))

        assert stats.total == 3
        assert stats.occupied == 1
        assert stats.notice == 1
        assert stats.occupancy_percent == 67
        assert stats.conflict_count == 0

    def test_counts_conflicts(self):
        a1 = make_address("a1", [make_space("s1", 1)], unassigned=[make_tenant("t9", space_id=None)])
        stats = compute_project_stats(make_project([a1]))
        assert stats.conflict_count == 1

    def test_empty_project(self):
        stats = compute_project_stats(make_project([]))
        assert stats.total == 0
        assert stats.occupancy_percent == 0


class TestPortfolioStats:
    def test_sums_projects_and_cost(self):
        p1 = Project("p1", "A", addresses=[make_address("a1", [make_space("s1", 1)], total_cost=1000)])
        p2 = Project("p2", "B", addresses=[make_address("a2", [make_space("s2", 1)], total_cost=2500.5)])
        stats = compute_portfolio_stats([p1, p2])

        assert stats.total == 2
        assert stats.vacant == 2
        assert stats.total_cost == 3500.5

    def test_no_projects(self):
        stats = compute_portfolio_stats([])
        assert stats.total == 0
        assert stats.total_cost == 0


class TestAddressHelpers:
    def test_tenant_count_ignores_notice_only_spaces(self):
        address = make_address("a1", [
            make_space("s1", 1, tenant=make_tenant("t1", space_id="s1")),
            make_space("s2", 2, notice=make_notice()),
        ])
        assert address_tenant_count(address) == 1

    def test_breakdown_rows(self):
        a1 = make_address("a1", [make_space("s1", 1, tenant=make_tenant("t1", space_id="s1"))],
                          operator="rent_planet")
        a2 = make_address("a2", [make_space("s2", 1)])
        project = make_project([a1, a2])

        rows = address_breakdown(project)
        assert [r["address_id"] for r in rows] == ["a1", "a2"]
        assert rows[0]["operator"] == "Rent Planet"
        assert rows[1]["operator"] == "Brak operatora"

        assert [r["address_id"] for r in addresses_with_vacancies(project)] == ["a2"]
        assert [r["address_id"] for r in addresses_with_occupants(project)] == ["a1"]

    def test_collect_operators_unique_in_order(self):
        project = make_project([
            make_address("a1", operator="e_port"),
            make_address("a2"),
            make_address("a3", operator="rent_planet"),
            make_address("a4", operator="e_port"),
        ])
        assert collect_operators(project) == ["e_port", "rent_planet"]


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
