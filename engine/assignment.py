"""Tenant lifecycle: register (unassigned) -> place in a space -> check out to the archive."""

from datetime import date, datetime
from typing import Dict, List, Optional, Tuple
from models import new_id
from models.address import Address
from models.archive import EvictionArchiveEntry
from models.project import Project
from models.room import Room
from models.space import Space
from models.tenant import Tenant
from engine.errors import NotFoundError
from config.defaults import EVICTION_REASONS, UNASSIGNED_SECTION_TITLE, ASSIGNED_SECTION_TITLE
from config.logging_setup import get_logger

logger = get_logger(__name__)


def find_tenant(address: Address, tenant_id: str) -> Tuple[Optional[Tenant], Optional[Space]]:
    """Locate a tenant within an address. Returns (tenant, owning space or None)."""
    for tenant in address.unassigned_tenants:
        if tenant.id == tenant_id:
            return tenant, None
    for space in address.iter_spaces():
        if space.tenant is not None and space.tenant.id == tenant_id:
            return space.tenant, space
    return None, None


def _require_room(address: Address, room: Room) -> Room:
    for r in address.rooms:
        if r.id == room.id:
            return r
    raise NotFoundError("Room", room.id)


def add_tenant(
    address: Address,
    first_name: str,
    last_name: str,
    gender: str,
    birth_year: int,
    check_in_date: date,
    monthly_price: float,
    work_start_date: Optional[date] = None,
    photo: Optional[str] = None,
) -> Tenant:
    """Register a tenant at the address without placing them in a space."""
    tenant = Tenant(
        id=new_id(),
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        gender=gender,
        birth_year=birth_year,
        check_in_date=check_in_date,
        monthly_price=monthly_price,
        work_start_date=work_start_date,
        photo=photo,
    )
    address.unassigned_tenants.append(tenant)
    logger.info("Registered tenant %s at address %s", tenant.full_name, address.name)
    return tenant


def select_tenant_for_room(address: Address, room: Room, tenant: Tenant) -> Optional[Space]:
    """Place a tenant in the first free space (lowest number) of a room.

    The tenant is taken out of the unassigned list and out of whatever space of
    the address currently holds them. If the room has no free space nothing
    changes and None is returned; the caller must check.
    """
    room = _require_room(address, room)
    live, _ = find_tenant(address, tenant.id)
    if live is None:
        live = tenant

    target = None
    for space in sorted(room.spaces, key=lambda s: s.number):
        if space.tenant is None or space.tenant.id == live.id:
            target = space
            break

    if target is None:
        logger.warning("No free space in room %s for %s", room.name, live.full_name)
        return None

    address.unassigned_tenants[:] = [t for t in address.unassigned_tenants if t.id != live.id]
    for space in address.iter_spaces():
        if space.tenant is not None and space.tenant.id == live.id:
            # status falls back to "notice" or "vacant" depending on the interval
            space.tenant = None

    live.space_id = target.id
    target.tenant = live
    logger.info("Placed %s in room %s, space %d", live.full_name, room.name, target.number)
    return target


def delete_tenant(address: Address, tenant_id: str) -> Tenant:
    """Remove a tenant from the address without archiving.

    A notice interval on the freed space is left in place.
    """
    tenant, space = find_tenant(address, tenant_id)
    if tenant is None:
        raise NotFoundError("Tenant", tenant_id)

    if space is None:
        address.unassigned_tenants[:] = [t for t in address.unassigned_tenants if t.id != tenant_id]
    else:
        space.tenant = None
    tenant.space_id = None
    logger.info("Deleted tenant %s from address %s", tenant.full_name, address.name)
    return tenant


def check_out_tenant(
    project: Project,
    address: Address,
    tenant_id: str,
    checkout_date: date,
    reason: str,
    now: Optional[datetime] = None,
) -> EvictionArchiveEntry:
    """Check a tenant out: free their space and return the archive entry to append."""
    if reason not in EVICTION_REASONS:
        raise ValueError(f"Unknown eviction reason: {reason}. Use one of {EVICTION_REASONS}.")
    if not any(a.id == address.id for a in project.addresses):
        raise NotFoundError("Address", address.id)

    tenant, space = find_tenant(address, tenant_id)
    if tenant is None:
        raise NotFoundError("Tenant", tenant_id)

    room_name = None
    if space is not None:
        for room in address.rooms:
            if any(s is space for s in room.spaces):
                room_name = room.name
                break

    entry = EvictionArchiveEntry(
        id=new_id(),
        tenant_id=tenant.id,
        first_name=tenant.first_name,
        last_name=tenant.last_name,
        project_id=project.id,
        project_name=project.name,
        address_id=address.id,
        address_name=address.name,
        check_in_date=tenant.check_in_date,
        check_out_date=checkout_date,
        reason=reason,
        created_at=now or datetime.now(),
        room_name=room_name,
    )

    if space is None:
        address.unassigned_tenants[:] = [t for t in address.unassigned_tenants if t.id != tenant_id]
    else:
        space.tenant = None
        space.notice = None

    logger.info("Checked out %s from %s (%s)", tenant.full_name, address.name, reason)
    return entry


def tenant_sections(address: Address) -> List[Dict]:
    """Split the address's tenants into "without room" and "already placed" sections."""
    placed = []
    for room in address.rooms:
        for space in room.spaces:
            if space.tenant is not None:
                placed.append({"tenant": space.tenant, "room_name": room.name})

    return [
        {"title": UNASSIGNED_SECTION_TITLE,
         "data": [{"tenant": t, "room_name": None} for t in address.unassigned_tenants]},
        {"title": ASSIGNED_SECTION_TITLE, "data": placed},
    ]


def suggest_tenants_for_room(address: Address, room: Room) -> List[Tenant]:
    """Candidate tenants for a room, matching-gender first; couple rooms take anyone.

    Advisory only: select_tenant_for_room never rejects on gender.
    """
    candidates = list(address.unassigned_tenants)
    for r in address.rooms:
        if r.id == room.id:
            continue
        candidates.extend(s.tenant for s in r.spaces if s.tenant is not None)

    if room.room_type == "couple":
        return candidates
    matching = [t for t in candidates if t.gender == room.room_type]
    others = [t for t in candidates if t.gender != room.room_type]
    return matching + others
