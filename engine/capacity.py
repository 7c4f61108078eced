"""Project/address/room/space CRUD with capacity limits and deletion guards."""

from typing import Dict, List, Optional
from models import new_id
from models.address import Address
from models.project import Project
from models.room import Room
from models.space import Space
from engine.errors import (
    NotFoundError, CapacityExceededError, SpacesOccupiedError,
    RoomOccupiedError, SpaceNotVacantError,
)
from config.defaults import ROOM_TYPES, OPERATORS, GENERATED_ROOM_NAME
from config.logging_setup import get_logger

logger = get_logger(__name__)

# Address fields that may be set on create/update
ADDRESS_DETAIL_FIELDS = {
    "name", "full_address", "total_spaces", "couple_rooms", "price_per_space",
    "couple_price", "total_cost", "eviction_period", "company_name", "owner_name",
    "phone", "operator", "operator_name", "photos",
}


def _find(items, item_id: str, kind: str):
    for item in items:
        if item.id == item_id:
            return item
    raise NotFoundError(kind, item_id)


def _check_room_type(room_type: str):
    if room_type not in ROOM_TYPES:
        raise ValueError(f"Unknown room type: {room_type}. Use one of {ROOM_TYPES}.")


def _check_address_details(details: dict):
    unknown = set(details) - ADDRESS_DETAIL_FIELDS
    if unknown:
        raise ValueError(f"Unknown address fields: {', '.join(sorted(unknown))}")
    operator = details.get("operator")
    if operator is not None and operator not in OPERATORS:
        raise ValueError(f"Unknown operator: {operator}. Use one of {OPERATORS}.")
    period = details.get("eviction_period")
    if period is not None and period <= 0:
        raise ValueError(f"Eviction period must be a positive number of days: {period}")


def _new_spaces(room_id: str, first_number: int, count: int) -> List[Space]:
    return [Space(id=new_id(), room_id=room_id, number=first_number + i) for i in range(count)]


# --- Projects ---

def add_project(projects: List[Project], name: str, city: Optional[str] = None) -> Project:
    project = Project(id=new_id(), name=name.strip(), city=city or None)
    projects.append(project)
    logger.info("Added project %s", project.name)
    return project


def update_project(projects: List[Project], project_id: str, name: Optional[str] = None,
                   city: Optional[str] = None) -> Project:
    project = _find(projects, project_id, "Project")
    if name is not None:
        project.name = name.strip()
    if city is not None:
        project.city = city or None
    return project


def delete_project(projects: List[Project], project_id: str) -> Project:
    """Remove a project together with all of its addresses."""
    project = _find(projects, project_id, "Project")
    projects.remove(project)
    logger.info("Deleted project %s (%d addresses)", project.name, len(project.addresses))
    return project


# --- Addresses ---

def add_address(project: Project, name: str, full_address: str, total_spaces: int = 0,
                **details) -> Address:
    _check_address_details(details)
    if total_spaces < 0:
        raise ValueError("Total spaces cannot be negative.")
    address = Address(
        id=new_id(),
        project_id=project.id,
        name=name.strip(),
        full_address=full_address.strip(),
        total_spaces=total_spaces,
        **details,
    )
    project.addresses.append(address)
    logger.info("Added address %s to project %s", address.name, project.name)
    return address


def update_address(address: Address, **updates) -> Address:
    """Update address details; the declared capacity cannot drop below the rooms' spaces."""
    _check_address_details(updates)
    new_total = updates.get("total_spaces")
    if new_total is not None and new_total < address.allocated_spaces:
        raise CapacityExceededError(address.allocated_spaces, new_total)

    for key, value in updates.items():
        setattr(address, key, value)
    return address


def delete_address(project: Project, address_id: str) -> Address:
    """Unconditional cascade delete; confirming unassigned tenants is up to the caller."""
    address = _find(project.addresses, address_id, "Address")
    project.addresses.remove(address)
    logger.info("Deleted address %s", address.name)
    return address


def capacity_summary(address: Address) -> Dict[str, int]:
    allocated = address.allocated_spaces
    return {
        "total": address.total_spaces,
        "allocated": allocated,
        "remaining": address.total_spaces - allocated,
    }


# --- Rooms ---

def add_room(address: Address, name: str, room_type: str, total_spaces: int) -> Room:
    """Create a room with vacant spaces numbered 1..N, within the address capacity."""
    _check_room_type(room_type)
    if total_spaces < 0:
        raise ValueError("Total spaces cannot be negative.")
    requested = address.allocated_spaces + total_spaces
    if requested > address.total_spaces:
        raise CapacityExceededError(requested, address.total_spaces)

    room_id = new_id()
    room = Room(
        id=room_id,
        address_id=address.id,
        name=name.strip(),
        room_type=room_type,
        total_spaces=total_spaces,
        spaces=_new_spaces(room_id, 1, total_spaces),
    )
    address.rooms.append(room)
    logger.info("Added room %s (%d spaces) to %s", room.name, total_spaces, address.name)
    return room


def generate_rooms(address: Address, count: int, room_type: str = "male") -> List[Room]:
    """Append `count` empty rooms named "Pokój N" (no spaces yet)."""
    _check_room_type(room_type)
    start = len(address.rooms) + 1
    rooms = []
    for n in range(start, start + count):
        rooms.append(Room(
            id=new_id(),
            address_id=address.id,
            name=GENERATED_ROOM_NAME.format(n=n),
            room_type=room_type,
            total_spaces=0,
        ))
    address.rooms.extend(rooms)
    return rooms


def resize_room(room: Room, new_count: int, address_total_cap: int, other_rooms_space_sum: int) -> Room:
    """Grow or shrink a room's spaces.

    Growing appends vacant spaces after the highest number. Shrinking removes
    vacant spaces from the highest-numbered end; if not enough of them exist
    nothing is removed.
    """
    if new_count < 0:
        raise ValueError("Total spaces cannot be negative.")
    requested = other_rooms_space_sum + new_count
    if requested > address_total_cap:
        raise CapacityExceededError(requested, address_total_cap)

    old_count = len(room.spaces)
    if new_count > old_count:
        next_number = max((s.number for s in room.spaces), default=0) + 1
        room.spaces.extend(_new_spaces(room.id, next_number, new_count - old_count))
    elif new_count < old_count:
        to_remove = old_count - new_count
        removable = []
        for space in sorted(room.spaces, key=lambda s: s.number, reverse=True):
            if len(removable) == to_remove:
                break
            if space.status == "vacant" and space.tenant is None:
                removable.append(space)
        if len(removable) < to_remove:
            raise SpacesOccupiedError(to_remove, to_remove - len(removable))
        removed_ids = {s.id for s in removable}
        room.spaces[:] = [s for s in room.spaces if s.id not in removed_ids]

    room.total_spaces = new_count
    logger.info("Room %s resized from %d to %d spaces", room.name, old_count, new_count)
    return room


def update_room(address: Address, room_id: str, name: Optional[str] = None,
                room_type: Optional[str] = None, total_spaces: Optional[int] = None) -> Room:
    room = _find(address.rooms, room_id, "Room")
    if room_type is not None:
        _check_room_type(room_type)
    if name is not None and not name.strip():
        raise ValueError("Room name cannot be empty.")

    if total_spaces is not None and total_spaces != len(room.spaces):
        others = sum(r.total_spaces for r in address.rooms if r.id != room.id)
        resize_room(room, total_spaces, address.total_spaces, others)

    if name is not None:
        room.name = name.strip()
    if room_type is not None:
        room.room_type = room_type
    return room


def delete_room(address: Address, room_id: str) -> Room:
    room = _find(address.rooms, room_id, "Room")
    if room.tenant_count:
        raise RoomOccupiedError(room.name, room.tenant_count)
    address.rooms.remove(room)
    logger.info("Deleted room %s from %s", room.name, address.name)
    return room


# --- Spaces ---

def delete_space(room: Room, space_id: str) -> Space:
    space = _find(room.spaces, space_id, "Space")
    if space.status != "vacant":
        raise SpaceNotVacantError(space.number, space.status)
    room.spaces.remove(space)
    room.total_spaces = len(room.spaces)
    return space
