"""Demo data for a first run with an empty store."""

from datetime import date, timedelta
from typing import List
from models.project import Project
from engine.assignment import add_tenant, select_tenant_for_room
from engine.capacity import add_project, add_address, add_room
from engine.notice import put_on_notice


def generate_demo_projects(today: date = None) -> List[Project]:
    """One populated project (two rooms, placed tenants, a notice) plus three empty ones."""
    today = today or date.today()
    projects: List[Project] = []

    alpha = add_project(projects, "Project Alpha", "Warszawa")
    address = add_address(
        alpha,
        "Akademik Centrum",
        "ul. Centralna 15",
        total_spaces=20,
        couple_rooms=2,
        company_name="Budmax Sp. z o.o.",
        owner_name="Jan Nowak",
        phone="+48 123 456 789",
        eviction_period=14,
        total_cost=10000,
        price_per_space=500,
        operator="rent_planet",
    )

    room_101 = add_room(address, "101", "female", 4)
    room_102 = add_room(address, "102", "male", 4)

    residents = [
        (room_101, "Anna", "Kowalska", "female", 1990, date(2024, 1, 15)),
        (room_101, "Maria", "Wiśniewska", "female", 1985, date(2024, 2, 1)),
        (room_102, "Piotr", "Zieliński", "male", 1988, date(2024, 3, 10)),
        (room_102, "Tomasz", "Lewandowski", "male", 1992, date(2024, 11, 1)),
    ]
    for room, first, last, gender, born, check_in in residents:
        tenant = add_tenant(address, first, last, gender, born, check_in, 500)
        select_tenant_for_room(address, room, tenant)

    # a vacant space waiting out its notice, and a tenant whose notice has already run out
    put_on_notice(room_101.spaces[2], 14, today - timedelta(days=4))
    put_on_notice(room_102.spaces[1], 14, today - timedelta(days=20))

    add_tenant(address, "Olga", "Kamińska", "female", 1995, today, 550)

    for name in ("Project Beta", "Project Gamma", "Project Delta"):
        add_project(projects, name)

    return projects


def initialize_demo_data(repository) -> bool:
    """Seed the repository only when it holds no projects. Returns True if seeded."""
    if repository.projects:
        return False
    repository.replace_all(generate_demo_projects(), [])
    return True
