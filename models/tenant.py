from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class Tenant:
    id: str
    first_name: str
    last_name: str
    gender: str                     # "male", "female"
    birth_year: int
    check_in_date: date
    monthly_price: float
    work_start_date: Optional[date] = None
    space_id: Optional[str] = None  # back-reference to the owning Space, None while unassigned
    photo: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
