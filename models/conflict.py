from dataclasses import dataclass
from typing import Optional


@dataclass
class Conflict:
    """Derived warning; recomputed on every scan and never persisted."""
    id: str
    conflict_type: str      # "no_room", "notice_overdue"
    project_id: str
    project_name: str
    address_id: str
    address_name: str
    tenant_id: str
    first_name: str
    last_name: str
    message: str
    space_id: Optional[str] = None

    @property
    def key(self) -> tuple:
        return (self.conflict_type, self.tenant_id, self.space_id)
