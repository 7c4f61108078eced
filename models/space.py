from dataclasses import dataclass
from datetime import date
from typing import Optional
from models.tenant import Tenant


@dataclass
class NoticeInterval:
    """A notice period ("wypowiedzenie") running on one space."""
    start_date: date
    end_date: date
    paid_until: date
    grouped_with_address: bool = False  # created by putting the whole address on notice


@dataclass
class Space:
    id: str
    room_id: str
    number: int                         # 1-based, unique within the room
    tenant: Optional[Tenant] = None
    notice: Optional[NoticeInterval] = None

    @property
    def status(self) -> str:
        """Single-value status derived from the occupancy and notice axes."""
        if self.notice is not None:
            return "notice"
        if self.tenant is not None:
            return "occupied"
        return "vacant"

    @property
    def is_free(self) -> bool:
        return self.tenant is None
