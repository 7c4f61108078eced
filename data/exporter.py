"""Serialization of the model tree to JSON documents, plus tenant/archive reports."""

import json
from datetime import datetime
from typing import List, Optional
import pandas as pd
from models.address import Address
from models.archive import EvictionArchiveEntry
from models.project import Project
from models.room import Room
from models.space import NoticeInterval, Space
from models.tenant import Tenant
from config.defaults import (
    EXPORT_VERSION, DATE_FORMAT, TENANT_REPORT_COLUMNS, ARCHIVE_REPORT_COLUMNS, EVICTION_REASON_LABELS,
)


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _drop_none(d: dict) -> dict:
    return {k: v for k, v in d.items() if v is not None}


def tenant_to_dict(tenant: Tenant) -> dict:
    return _drop_none({
        "id": tenant.id,
        "firstName": tenant.first_name,
        "lastName": tenant.last_name,
        "gender": tenant.gender,
        "birthYear": tenant.birth_year,
        "checkInDate": _iso(tenant.check_in_date),
        "workStartDate": _iso(tenant.work_start_date),
        "monthlyPrice": tenant.monthly_price,
        "spaceId": tenant.space_id,
        "photo": tenant.photo,
    })


def notice_to_dict(notice: NoticeInterval) -> dict:
    return {
        "startDate": _iso(notice.start_date),
        "endDate": _iso(notice.end_date),
        "paidUntil": _iso(notice.paid_until),
        "groupedWithAddress": notice.grouped_with_address,
    }


def space_to_dict(space: Space) -> dict:
    # status is written for readers of the single-value format
    return _drop_none({
        "id": space.id,
        "roomId": space.room_id,
        "number": space.number,
        "status": space.status,
        "tenant": tenant_to_dict(space.tenant) if space.tenant else None,
        "wypowiedzenie": notice_to_dict(space.notice) if space.notice else None,
    })


def room_to_dict(room: Room) -> dict:
    return {
        "id": room.id,
        "addressId": room.address_id,
        "name": room.name,
        "type": room.room_type,
        "totalSpaces": room.total_spaces,
        "spaces": [space_to_dict(s) for s in room.spaces],
    }


def address_to_dict(address: Address) -> dict:
    return _drop_none({
        "id": address.id,
        "projectId": address.project_id,
        "name": address.name,
        "fullAddress": address.full_address,
        "totalSpaces": address.total_spaces,
        "coupleRooms": address.couple_rooms,
        "pricePerSpace": address.price_per_space,
        "couplePrice": address.couple_price,
        "totalCost": address.total_cost,
        "evictionPeriod": address.eviction_period,
        "companyName": address.company_name,
        "ownerName": address.owner_name,
        "phone": address.phone,
        "operator": address.operator,
        "operatorName": address.operator_name or None,
        "rooms": [room_to_dict(r) for r in address.rooms],
        "photos": list(address.photos),
        "unassignedTenants": [tenant_to_dict(t) for t in address.unassigned_tenants],
        "status": address.status,
        "noticeStart": _iso(address.notice_start),
    })


def project_to_dict(project: Project) -> dict:
    return _drop_none({
        "id": project.id,
        "name": project.name,
        "city": project.city,
        "addresses": [address_to_dict(a) for a in project.addresses],
    })


def archive_entry_to_dict(entry: EvictionArchiveEntry) -> dict:
    return _drop_none({
        "id": entry.id,
        "tenantId": entry.tenant_id,
        "firstName": entry.first_name,
        "lastName": entry.last_name,
        "projectId": entry.project_id,
        "projectName": entry.project_name,
        "addressId": entry.address_id,
        "addressName": entry.address_name,
        "roomName": entry.room_name,
        "checkInDate": _iso(entry.check_in_date),
        "checkOutDate": _iso(entry.check_out_date),
        "reason": entry.reason,
        "createdAt": _iso(entry.created_at),
    })


def projects_to_json(projects: List[Project]) -> str:
    return json.dumps([project_to_dict(p) for p in projects], ensure_ascii=False)


def archive_to_json(archive: List[EvictionArchiveEntry]) -> str:
    return json.dumps([archive_entry_to_dict(e) for e in archive], ensure_ascii=False)


def build_export_document(
    projects: List[Project],
    archive: List[EvictionArchiveEntry],
    now: Optional[datetime] = None,
) -> dict:
    return {
        "version": EXPORT_VERSION,
        "exportDate": (now or datetime.now()).isoformat(),
        "projects": [project_to_dict(p) for p in projects],
        "evictionArchive": [archive_entry_to_dict(e) for e in archive],
    }


def export_json(projects: List[Project], archive: List[EvictionArchiveEntry],
                now: Optional[datetime] = None) -> str:
    return json.dumps(build_export_document(projects, archive, now), ensure_ascii=False, indent=2)


# --- Reports ---

def tenant_report_frame(project: Project) -> pd.DataFrame:
    """One row per placed tenant of the project."""
    rows = []
    for address in project.addresses:
        for room in address.rooms:
            for space in room.spaces:
                tenant = space.tenant
                if tenant is None:
                    continue
                rows.append([
                    project.name,
                    address.name,
                    room.name,
                    space.number,
                    tenant.first_name,
                    tenant.last_name,
                    tenant.gender,
                    tenant.birth_year,
                    _iso(tenant.check_in_date),
                    tenant.monthly_price,
                ])
    return pd.DataFrame(rows, columns=TENANT_REPORT_COLUMNS)


def tenant_report_csv(project: Project) -> str:
    return tenant_report_frame(project).to_csv(index=False)


def tenant_report_excel(project: Project, path) -> None:
    """Write the tenant report as a single-sheet workbook."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        tenant_report_frame(project).to_excel(writer, sheet_name="Mieszkańcy", index=False)


def report_filename(project: Project, extension: str = "csv", now: Optional[datetime] = None) -> str:
    day = (now or datetime.now()).strftime(DATE_FORMAT)
    return f"{project.name}-{day}.{extension}"


def archive_frame(archive: List[EvictionArchiveEntry]) -> pd.DataFrame:
    rows = [
        [
            e.first_name,
            e.last_name,
            e.project_name,
            e.address_name,
            e.room_name or "",
            _iso(e.check_in_date),
            _iso(e.check_out_date),
            EVICTION_REASON_LABELS.get(e.reason, e.reason),
        ]
        for e in archive
    ]
    return pd.DataFrame(rows, columns=ARCHIVE_REPORT_COLUMNS)
