"""JSON parsing: persisted blobs and import files into typed model trees."""

import json
from datetime import date, datetime
from typing import List, Optional, Tuple
from models.address import Address
from models.archive import EvictionArchiveEntry
from models.project import Project
from models.room import Room
from models.space import NoticeInterval, Space
from models.tenant import Tenant
from data.validator import validate_import_document
from engine.errors import InvalidImportStructureError
from config.defaults import DEFAULT_EVICTION_PERIOD_DAYS


def parse_date(value) -> Optional[date]:
    """Accept 'YYYY-MM-DD' or a full ISO timestamp; empty means None."""
    if not value:
        return None
    return date.fromisoformat(str(value)[:10])


def parse_datetime(value) -> Optional[datetime]:
    if not value:
        return None
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def parse_tenant(d: dict) -> Tenant:
    return Tenant(
        id=str(d["id"]),
        first_name=str(d["firstName"]).strip(),
        last_name=str(d["lastName"]).strip(),
        gender=d.get("gender", "male"),
        birth_year=int(d.get("birthYear", 0)),
        check_in_date=parse_date(d["checkInDate"]),
        monthly_price=d.get("monthlyPrice", 0),
        work_start_date=parse_date(d.get("workStartDate")),
        space_id=d.get("spaceId") or None,
        photo=d.get("photo"),
    )


def parse_notice(d: dict) -> NoticeInterval:
    end_date = parse_date(d["endDate"])
    return NoticeInterval(
        start_date=parse_date(d["startDate"]),
        end_date=end_date,
        paid_until=parse_date(d.get("paidUntil")) or end_date,
        grouped_with_address=bool(d.get("groupedWithAddress", False)),
    )


def parse_space(d: dict, room_id: str) -> Space:
    # status is derived; older files carry the interval under "wypowiedzenie"
    notice = d.get("wypowiedzenie") or d.get("notice")
    tenant = d.get("tenant")
    return Space(
        id=str(d["id"]),
        room_id=d.get("roomId") or room_id,
        number=int(d["number"]),
        tenant=parse_tenant(tenant) if tenant else None,
        notice=parse_notice(notice) if notice else None,
    )


def parse_room(d: dict, address_id: str) -> Room:
    room_id = str(d["id"])
    spaces = [parse_space(s, room_id) for s in d.get("spaces", [])]
    return Room(
        id=room_id,
        address_id=d.get("addressId") or address_id,
        name=str(d.get("name", d.get("number", ""))),
        room_type=d.get("type", "male"),
        total_spaces=int(d.get("totalSpaces", len(spaces))),
        spaces=spaces,
    )


def parse_address(d: dict, project_id: str) -> Address:
    address_id = str(d["id"])
    period = d.get("evictionPeriod")
    return Address(
        id=address_id,
        project_id=d.get("projectId") or project_id,
        name=str(d["name"]),
        full_address=str(d.get("fullAddress", "")),
        total_spaces=int(d.get("totalSpaces", 0)),
        couple_rooms=int(d.get("coupleRooms", 0)),
        price_per_space=d.get("pricePerSpace", 0),
        couple_price=d.get("couplePrice", 0),
        total_cost=d.get("totalCost", 0),
        eviction_period=int(period) if period is not None else DEFAULT_EVICTION_PERIOD_DAYS,
        company_name=d.get("companyName", ""),
        owner_name=d.get("ownerName", ""),
        phone=d.get("phone", ""),
        operator=d.get("operator"),
        operator_name=d.get("operatorName", ""),
        rooms=[parse_room(r, address_id) for r in d.get("rooms", [])],
        photos=list(d.get("photos", [])),
        unassigned_tenants=[parse_tenant(t) for t in d.get("unassignedTenants", [])],
        status=d.get("status", "active"),
        notice_start=parse_datetime(d.get("noticeStart")),
    )


def parse_project(d: dict) -> Project:
    project_id = str(d["id"])
    return Project(
        id=project_id,
        name=str(d["name"]),
        city=d.get("city") or None,
        addresses=[parse_address(a, project_id) for a in d.get("addresses", [])],
    )


def parse_projects(items: list) -> List[Project]:
    return [parse_project(p) for p in items]


def parse_archive_entry(d: dict) -> EvictionArchiveEntry:
    return EvictionArchiveEntry(
        id=str(d["id"]),
        tenant_id=str(d["tenantId"]),
        first_name=d["firstName"],
        last_name=d["lastName"],
        project_id=d.get("projectId", ""),
        project_name=d.get("projectName", ""),
        address_id=d.get("addressId", ""),
        address_name=d.get("addressName", ""),
        check_in_date=parse_date(d["checkInDate"]),
        check_out_date=parse_date(d["checkOutDate"]),
        reason=d.get("reason", "job_change"),
        created_at=parse_datetime(d.get("createdAt")) or datetime.now(),
        room_name=d.get("roomName"),
    )


def parse_archive(items: list) -> List[EvictionArchiveEntry]:
    return [parse_archive_entry(e) for e in items]


def parse_import_document(source) -> Tuple[List[Project], List[EvictionArchiveEntry]]:
    """Parse an export document (JSON text, bytes or an already-decoded dict).

    Raises InvalidImportStructureError unless `projects` is an array and every
    entry parses; `evictionArchive` is optional.
    """
    if isinstance(source, (str, bytes)):
        try:
            source = json.loads(source)
        except ValueError as e:
            raise InvalidImportStructureError([f"Not valid JSON: {e}"])

    result = validate_import_document(source)
    if not result.is_valid:
        raise InvalidImportStructureError(result.errors)

    try:
        projects = parse_projects(source["projects"])
        archive = parse_archive(source.get("evictionArchive") or [])
    except (KeyError, ValueError, TypeError) as e:
        raise InvalidImportStructureError([f"Malformed entry: {e!r}"])
    return projects, archive


def load_import_file(uploaded_file) -> Tuple[List[Project], List[EvictionArchiveEntry]]:
    """Load an uploaded export file (.json) into projects and archive."""
    name = uploaded_file.name.lower()
    if not name.endswith(".json"):
        raise ValueError(f"Unsupported file format: {name}. Use a JSON export file.")
    return parse_import_document(uploaded_file.read())
