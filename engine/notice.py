"""Notice-period ("wypowiedzenie") transitions for spaces and whole addresses."""

from datetime import date, datetime, timedelta
from typing import Dict, List, Optional
from models.address import Address
from models.project import Project
from models.space import NoticeInterval, Space
from models.tenant import Tenant
from engine.conflicts import days_remaining
from config.defaults import DEFAULT_EVICTION_PERIOD_DAYS
from config.logging_setup import get_logger

logger = get_logger(__name__)


def notice_period(address: Address) -> int:
    """The address's eviction period, or the default when it is not a positive number of days."""
    if address.eviction_period and address.eviction_period > 0:
        return address.eviction_period
    return DEFAULT_EVICTION_PERIOD_DAYS


def _start_notice(space: Space, period_days: int, start_date: date, grouped: bool) -> NoticeInterval:
    end_date = start_date + timedelta(days=period_days)
    space.notice = NoticeInterval(
        start_date=start_date,
        end_date=end_date,
        paid_until=end_date,
        grouped_with_address=grouped,
    )
    return space.notice


def put_on_notice(
    space: Space,
    period_days: int = DEFAULT_EVICTION_PERIOD_DAYS,
    start_date: Optional[date] = None,
) -> NoticeInterval:
    """Put a single space on notice; replaces any interval already running."""
    if period_days < 0:
        raise ValueError(f"Notice period cannot be negative: {period_days}")
    interval = _start_notice(space, period_days, start_date or date.today(), grouped=False)
    logger.info("Space %d on notice until %s", space.number, interval.end_date)
    return interval


def remove_from_notice(space: Space) -> Optional[NoticeInterval]:
    """Clear the space's notice; it becomes occupied or vacant depending on the tenant."""
    interval = space.notice
    space.notice = None
    if interval is not None:
        logger.info("Space %d taken off notice", space.number)
    return interval


def put_address_on_notice(address: Address, now: Optional[datetime] = None) -> int:
    """Put the whole address on notice.

    Every space not already on notice gets a grouped interval using the
    address's eviction period. Returns the number of spaces affected.
    """
    now = now or datetime.now()
    period = notice_period(address)
    address.status = "notice"
    address.notice_start = now

    count = 0
    for space in address.iter_spaces():
        if space.status != "notice":
            _start_notice(space, period, now.date(), grouped=True)
            count += 1
    logger.info("Address %s on notice (%d spaces)", address.name, count)
    return count


def remove_address_from_notice(address: Address) -> List[Tenant]:
    """Lift the address-level notice.

    Spaces whose interval came from the address notice are emptied (the tenant
    is evicted) and cleared; individually noticed spaces are untouched.
    Returns the evicted tenants.
    """
    address.status = "active"
    address.notice_start = None

    evicted = []
    for space in address.iter_spaces():
        if space.notice is not None and space.notice.grouped_with_address:
            if space.tenant is not None:
                space.tenant.space_id = None
                evicted.append(space.tenant)
            space.tenant = None
            space.notice = None
    logger.info("Address %s back to active, %d tenant(s) released", address.name, len(evicted))
    return evicted


def list_notices(projects: List[Project], now: Optional[datetime] = None) -> List[Dict]:
    """Every tenant-bearing space on notice, with its countdown."""
    rows = []
    for project in projects:
        for address in project.addresses:
            for room in address.rooms:
                for space in room.spaces:
                    if space.tenant is None or space.notice is None:
                        continue
                    remaining = days_remaining(space.notice.end_date, now)
                    rows.append({
                        "project_id": project.id,
                        "project_name": project.name,
                        "address_name": address.name,
                        "room_name": room.name,
                        "space_id": space.id,
                        "space_number": space.number,
                        "tenant": space.tenant,
                        "end_date": space.notice.end_date,
                        "days_remaining": remaining,
                        "overdue": remaining < 0,
                        "grouped": space.notice.grouped_with_address,
                    })
    return rows


def release_expired_notices(projects: List[Project], today: Optional[date] = None) -> int:
    """Clear expired notices on spaces that no longer hold a tenant.

    Spaces that still hold a tenant are left alone; the conflict detector
    reports them as overdue.
    """
    today = today or date.today()
    released = 0
    for project in projects:
        for address in project.addresses:
            for space in address.iter_spaces():
                if space.tenant is None and space.notice is not None and space.notice.end_date <= today:
                    space.notice = None
                    released += 1
    if released:
        logger.info("Released %d expired notice(s)", released)
    return released
