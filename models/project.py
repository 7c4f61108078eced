from dataclasses import dataclass, field
from typing import List, Optional
from models.address import Address


@dataclass
class Project:
    id: str
    name: str
    city: Optional[str] = None
    addresses: List[Address] = field(default_factory=list)
