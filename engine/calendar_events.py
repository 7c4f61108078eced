"""Calendar view: check-ins, notice ends and check-outs across projects."""

from typing import Iterable, List
from models.archive import EvictionArchiveEntry
from models.calendar_event import CalendarEvent
from models.project import Project


def build_calendar_events(projects: List[Project], archive: List[EvictionArchiveEntry]) -> List[CalendarEvent]:
    events = []
    for project in projects:
        for address in project.addresses:
            for room in address.rooms:
                for space in room.spaces:
                    tenant = space.tenant
                    if tenant is None:
                        continue
                    events.append(CalendarEvent(
                        id=f"checkin-{space.id}",
                        event_date=tenant.check_in_date,
                        event_type="check_in",
                        project_name=project.name,
                        address_name=address.name,
                        tenant_name=tenant.full_name,
                        room_name=room.name,
                    ))
                    if space.notice is not None:
                        events.append(CalendarEvent(
                            id=f"notice-{space.id}",
                            event_date=space.notice.end_date,
                            event_type="notice_end",
                            project_name=project.name,
                            address_name=address.name,
                            tenant_name=tenant.full_name,
                            room_name=room.name,
                        ))

    for entry in archive:
        events.append(CalendarEvent(
            id=f"checkout-{entry.id}",
            event_date=entry.check_out_date,
            event_type="check_out",
            project_name=entry.project_name,
            address_name=entry.address_name,
            tenant_name=f"{entry.first_name} {entry.last_name}",
            room_name=entry.room_name,
        ))
    return events


def filter_events(events: List[CalendarEvent], project_names: Iterable[str]) -> List[CalendarEvent]:
    """Keep events of the given projects; an empty selection keeps everything."""
    names = set(project_names)
    if not names:
        return list(events)
    return [e for e in events if e.project_name in names]


def events_for_month(events: List[CalendarEvent], year: int, month: int) -> List[CalendarEvent]:
    selected = [e for e in events if e.event_date.year == year and e.event_date.month == month]
    return sorted(selected, key=lambda e: e.event_date)
