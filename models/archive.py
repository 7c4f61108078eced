from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class EvictionArchiveEntry:
    """Immutable record of a completed check-out."""
    id: str
    tenant_id: str
    first_name: str
    last_name: str
    project_id: str
    project_name: str
    address_id: str
    address_name: str
    check_in_date: date
    check_out_date: date
    reason: str             # "job_change", "own_housing", "disciplinary", "relocation"
    created_at: datetime
    room_name: Optional[str] = None
