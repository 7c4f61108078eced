from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, List, Optional
from models.room import Room
from models.space import Space
from models.tenant import Tenant
from config.defaults import DEFAULT_EVICTION_PERIOD_DAYS, OPERATOR_NAMES, NO_OPERATOR_LABEL


@dataclass
class Address:
    id: str
    project_id: str
    name: str
    full_address: str
    total_spaces: int = 0
    couple_rooms: int = 0
    price_per_space: float = 0.0
    couple_price: float = 0.0
    total_cost: float = 0.0
    eviction_period: int = DEFAULT_EVICTION_PERIOD_DAYS   # days
    company_name: str = ""
    owner_name: str = ""
    phone: str = ""
    operator: Optional[str] = None      # "rent_planet", "e_port", "other"
    operator_name: str = ""             # custom name when operator == "other"
    rooms: List[Room] = field(default_factory=list)
    photos: List[str] = field(default_factory=list)
    unassigned_tenants: List[Tenant] = field(default_factory=list)
    status: str = "active"              # "active", "notice"
    notice_start: Optional[datetime] = None

    @property
    def operator_display_name(self) -> str:
        if self.operator in OPERATOR_NAMES:
            return OPERATOR_NAMES[self.operator]
        if self.operator == "other" and self.operator_name:
            return self.operator_name
        return NO_OPERATOR_LABEL

    @property
    def allocated_spaces(self) -> int:
        """Sum of the declared capacity of all rooms."""
        return sum(r.total_spaces for r in self.rooms)

    def iter_spaces(self) -> Iterator[Space]:
        for room in self.rooms:
            yield from room.spaces
