"""Occupancy statistics at space, room, address, project and portfolio level."""

from typing import Dict, Iterable, List
from models.address import Address
from models.project import Project
from models.room import Room
from models.space import Space
from models.stats import SpaceStats, ProjectStats, PortfolioStats
from engine.conflicts import detect_conflicts


def compute_space_stats(spaces: Iterable[Space]) -> SpaceStats:
    """Classify each space by status; people are counted whenever a tenant is present."""
    stats = SpaceStats()
    for space in spaces:
        stats.total += 1
        status = space.status
        if status == "vacant":
            stats.vacant += 1
        elif status == "occupied":
            stats.occupied += 1
        elif status == "notice":
            stats.notice += 1
        if space.tenant is not None:
            stats.people_count += 1
    return stats


def compute_room_stats(room: Room) -> SpaceStats:
    return compute_space_stats(room.spaces)


def compute_address_stats(address: Address) -> SpaceStats:
    return compute_space_stats(address.iter_spaces())


def occupancy_percent(stats: SpaceStats) -> int:
    """Occupied plus on-notice share of all spaces, rounded; 0 for an empty tree."""
    if stats.total == 0:
        return 0
    # round half up
    return int((stats.occupied + stats.notice) / stats.total * 100 + 0.5)


def _project_spaces(project: Project):
    for address in project.addresses:
        yield from address.iter_spaces()


def compute_project_stats(project: Project) -> ProjectStats:
    base = compute_space_stats(_project_spaces(project))
    return ProjectStats(
        total=base.total,
        occupied=base.occupied,
        vacant=base.vacant,
        notice=base.notice,
        people_count=base.people_count,
        occupancy_percent=occupancy_percent(base),
        conflict_count=len(detect_conflicts(project)),
    )


def compute_portfolio_stats(projects: List[Project]) -> PortfolioStats:
    """Aggregate statistics over every project, plus the summed address cost."""
    base = compute_space_stats(s for p in projects for s in _project_spaces(p))
    total_cost = sum(a.total_cost or 0 for p in projects for a in p.addresses)
    return PortfolioStats(
        total=base.total,
        occupied=base.occupied,
        vacant=base.vacant,
        notice=base.notice,
        people_count=base.people_count,
        occupancy_percent=occupancy_percent(base),
        conflict_count=sum(len(detect_conflicts(p)) for p in projects),
        total_cost=total_cost,
    )


def address_tenant_count(address: Address) -> int:
    """Number of tenants placed in spaces (not the number of spaces)."""
    return sum(room.tenant_count for room in address.rooms)


def address_breakdown(project: Project) -> List[Dict]:
    """Per-address rows for the occupied/vacant detail views."""
    rows = []
    for address in project.addresses:
        stats = compute_address_stats(address)
        rows.append({
            "address_id": address.id,
            "address_name": address.name,
            "operator": address.operator_display_name,
            "total": stats.total,
            "occupied": stats.occupied,
            "vacant": stats.vacant,
            "notice": stats.notice,
            "people": stats.people_count,
            "unassigned": len(address.unassigned_tenants),
        })
    return rows


def addresses_with_vacancies(project: Project) -> List[Dict]:
    return [row for row in address_breakdown(project) if row["vacant"] > 0]


def addresses_with_occupants(project: Project) -> List[Dict]:
    return [row for row in address_breakdown(project) if row["occupied"] > 0]


def collect_operators(project: Project) -> List[str]:
    """Unique operators of the project's addresses, in first-seen order."""
    operators = []
    for address in project.addresses:
        if address.operator and address.operator not in operators:
            operators.append(address.operator)
    return operators
