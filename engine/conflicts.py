"""Conflict detection: unassigned tenants and overdue notice periods."""

import math
from collections import OrderedDict
from datetime import date, datetime, time
from typing import Dict, List, Optional
from models import new_id
from models.conflict import Conflict
from models.project import Project
from models.tenant import Tenant
from config.defaults import NO_ROOM_MESSAGE, NOTICE_OVERDUE_MESSAGE

SECONDS_PER_DAY = 24 * 60 * 60


def days_remaining(end_date: date, now: Optional[datetime] = None) -> int:
    """Whole days until the end date (midnight), rounded up; negative once overdue."""
    now = now or datetime.now()
    end = datetime.combine(end_date, time.min)
    return math.ceil((end - now).total_seconds() / SECONDS_PER_DAY)


def is_overdue(end_date: date, now: Optional[datetime] = None) -> bool:
    return days_remaining(end_date, now) < 0


def _make_conflict(conflict_type, message_template, project, address, tenant: Tenant, space_id=None):
    return Conflict(
        id=new_id(),
        conflict_type=conflict_type,
        project_id=project.id,
        project_name=project.name,
        address_id=address.id,
        address_name=address.name,
        tenant_id=tenant.id,
        first_name=tenant.first_name,
        last_name=tenant.last_name,
        message=message_template.format(first=tenant.first_name, last=tenant.last_name),
        space_id=space_id,
    )


def detect_conflicts(project: Project, now: Optional[datetime] = None) -> List[Conflict]:
    """Scan a project for conflicts.

    Unassigned-tenant conflicts come first (address order, then tenant order),
    followed by per-space conflicts in address/room/space order. Ids are minted
    fresh on every call.
    """
    no_room = []
    for address in project.addresses:
        for tenant in address.unassigned_tenants:
            no_room.append(_make_conflict("no_room", NO_ROOM_MESSAGE, project, address, tenant))

    per_space = []
    for address in project.addresses:
        for room in address.rooms:
            for space in room.spaces:
                tenant = space.tenant
                if tenant is None:
                    continue
                if not tenant.space_id:
                    # tenant sits in a space but its back-reference was never set
                    per_space.append(_make_conflict(
                        "no_room", NO_ROOM_MESSAGE, project, address, tenant, space.id,
                    ))
                if space.notice is not None and is_overdue(space.notice.end_date, now):
                    per_space.append(_make_conflict(
                        "notice_overdue", NOTICE_OVERDUE_MESSAGE, project, address, tenant, space.id,
                    ))

    return no_room + per_space


def detect_all_conflicts(projects: List[Project], now: Optional[datetime] = None) -> List[Conflict]:
    conflicts = []
    for project in projects:
        conflicts.extend(detect_conflicts(project, now))
    return conflicts


def group_conflicts_by_project(conflicts: List[Conflict]) -> Dict[str, List[Conflict]]:
    grouped = OrderedDict()
    for conflict in conflicts:
        grouped.setdefault(conflict.project_id, []).append(conflict)
    return grouped
