from dataclasses import dataclass, field
from typing import List
from models.space import Space


@dataclass
class Room:
    id: str
    address_id: str
    name: str
    room_type: str          # "male", "female", "couple"
    total_spaces: int       # declared capacity
    spaces: List[Space] = field(default_factory=list)

    @property
    def tenant_count(self) -> int:
        return sum(1 for s in self.spaces if s.tenant is not None)
