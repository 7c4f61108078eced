from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class CalendarEvent:
    id: str
    event_date: date
    event_type: str         # "check_in", "notice_end", "check_out"
    project_name: str
    address_name: str
    tenant_name: str
    room_name: Optional[str] = None
