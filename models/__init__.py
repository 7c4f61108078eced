import uuid

from models.tenant import Tenant
from models.space import NoticeInterval, Space
from models.room import Room
from models.address import Address
from models.project import Project
from models.archive import EvictionArchiveEntry
from models.conflict import Conflict
from models.stats import SpaceStats, ProjectStats, PortfolioStats
from models.calendar_event import CalendarEvent


def new_id() -> str:
    return str(uuid.uuid4())
