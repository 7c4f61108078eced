"""Store of all projects and the eviction archive.

The project tree is kept as nested owning lists (the persisted shape) and
indexed by id after every commit. Mutations run through `with_projects`,
`with_project` or `with_address`: the callback works on a deep copy of the
scope, and the copy replaces the original only if the callback returns
normally. A failed operation therefore leaves the tree untouched.
"""

import copy
import json
from datetime import date, datetime
from typing import Callable, Dict, List, Optional, Tuple
from models.address import Address
from models.archive import EvictionArchiveEntry
from models.conflict import Conflict
from models.project import Project
from models.room import Room
from models.space import Space
from data.storage import BlobStorage
from data.loader import parse_projects, parse_archive, parse_import_document
from data.exporter import projects_to_json, archive_to_json, build_export_document
from engine import assignment, capacity, notice
from engine.calendar_events import build_calendar_events
from engine.conflicts import detect_conflicts, detect_all_conflicts
from engine.errors import NotFoundError
from engine.stats import compute_project_stats, compute_portfolio_stats
from config.defaults import PROJECTS_STORAGE_KEY, ARCHIVE_STORAGE_KEY
from config.logging_setup import get_logger

logger = get_logger(__name__)


def _room_in(address: Address, room_id: str) -> Room:
    for room in address.rooms:
        if room.id == room_id:
            return room
    raise NotFoundError("Room", room_id)


def _space_in(address: Address, space_id: str) -> Space:
    for space in address.iter_spaces():
        if space.id == space_id:
            return space
    raise NotFoundError("Space", space_id)


def _address_in(project: Project, address_id: str) -> Address:
    for address in project.addresses:
        if address.id == address_id:
            return address
    raise NotFoundError("Address", address_id)


class HousingRepository:
    def __init__(self, storage: BlobStorage):
        self.storage = storage
        self.projects: List[Project] = []
        self.archive: List[EvictionArchiveEntry] = []
        self._reindex()

    # --- Persistence ---

    def load(self) -> "HousingRepository":
        self.projects = self._read_blob(PROJECTS_STORAGE_KEY, parse_projects)
        self.archive = self._read_blob(ARCHIVE_STORAGE_KEY, parse_archive)
        self._reindex()
        logger.info("Loaded %d projects, %d archive entries", len(self.projects), len(self.archive))
        return self

    def _read_blob(self, key: str, parser: Callable) -> list:
        raw = self.storage.get_item(key)
        if not raw:
            return []
        try:
            return parser(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            logger.error("Error loading %s: %s", key, e)
            return []

    def save(self):
        self.storage.set_item(PROJECTS_STORAGE_KEY, projects_to_json(self.projects))
        self.storage.set_item(ARCHIVE_STORAGE_KEY, archive_to_json(self.archive))
        logger.debug("Saved %d projects", len(self.projects))

    def replace_all(self, projects: List[Project], archive: List[EvictionArchiveEntry]):
        """Destructive import: both collections are replaced wholesale."""
        self.projects = list(projects)
        self.archive = list(archive)
        self._reindex()
        logger.info("Replaced data: %d projects, %d archive entries", len(projects), len(archive))

    def import_document(self, source):
        """Parse and apply an export document; raises before anything changes."""
        projects, archive = parse_import_document(source)
        self.replace_all(projects, archive)

    def export_document(self, now: Optional[datetime] = None) -> dict:
        return build_export_document(self.projects, self.archive, now)

    # --- Index ---

    def _reindex(self):
        self._projects: Dict[str, Project] = {}
        self._addresses: Dict[str, Address] = {}
        self._address_project: Dict[str, str] = {}
        self._rooms: Dict[str, Room] = {}
        self._room_address: Dict[str, str] = {}
        self._spaces: Dict[str, Space] = {}
        self._space_room: Dict[str, str] = {}
        self._tenant_address: Dict[str, str] = {}

        for project in self.projects:
            self._projects[project.id] = project
            for address in project.addresses:
                self._addresses[address.id] = address
                self._address_project[address.id] = project.id
                for tenant in address.unassigned_tenants:
                    self._tenant_address[tenant.id] = address.id
                for room in address.rooms:
                    self._rooms[room.id] = room
                    self._room_address[room.id] = address.id
                    for space in room.spaces:
                        self._spaces[space.id] = space
                        self._space_room[space.id] = room.id
                        if space.tenant is not None:
                            self._tenant_address[space.tenant.id] = address.id

    @staticmethod
    def _lookup(index: dict, kind: str, entity_id: str):
        try:
            return index[entity_id]
        except KeyError:
            raise NotFoundError(kind, entity_id)

    def get_project(self, project_id: str) -> Project:
        return self._lookup(self._projects, "Project", project_id)

    def get_address(self, address_id: str) -> Address:
        return self._lookup(self._addresses, "Address", address_id)

    def get_room(self, room_id: str) -> Room:
        return self._lookup(self._rooms, "Room", room_id)

    def get_space(self, space_id: str) -> Space:
        return self._lookup(self._spaces, "Space", space_id)

    def project_of_address(self, address_id: str) -> Project:
        return self.get_project(self._lookup(self._address_project, "Address", address_id))

    def address_of_room(self, room_id: str) -> Address:
        return self.get_address(self._lookup(self._room_address, "Room", room_id))

    def room_of_space(self, space_id: str) -> Room:
        return self.get_room(self._lookup(self._space_room, "Space", space_id))

    def address_of_space(self, space_id: str) -> Address:
        return self.address_of_room(self.room_of_space(space_id).id)

    def locate_tenant(self, tenant_id: str) -> Tuple[Project, Address]:
        address_id = self._lookup(self._tenant_address, "Tenant", tenant_id)
        return self.project_of_address(address_id), self.get_address(address_id)

    # --- Scoped updates ---

    def with_projects(self, fn: Callable):
        working = copy.deepcopy(self.projects)
        result = fn(working)
        self.projects = working
        self._reindex()
        return result

    def with_project(self, project_id: str, fn: Callable):
        original = self.get_project(project_id)
        working = copy.deepcopy(original)
        result = fn(working)
        idx = next(i for i, p in enumerate(self.projects) if p is original)
        self.projects[idx] = working
        self._reindex()
        return result

    def with_address(self, address_id: str, fn: Callable):
        project = self.project_of_address(address_id)
        original = self.get_address(address_id)
        working = copy.deepcopy(original)
        result = fn(working)
        idx = next(i for i, a in enumerate(project.addresses) if a is original)
        project.addresses[idx] = working
        self._reindex()
        return result

    # --- Projects & addresses ---

    def add_project(self, name: str, city: Optional[str] = None) -> Project:
        return self.with_projects(lambda ps: capacity.add_project(ps, name, city))

    def update_project(self, project_id: str, name: Optional[str] = None, city: Optional[str] = None) -> Project:
        return self.with_projects(lambda ps: capacity.update_project(ps, project_id, name, city))

    def delete_project(self, project_id: str) -> Project:
        return self.with_projects(lambda ps: capacity.delete_project(ps, project_id))

    def add_address(self, project_id: str, name: str, full_address: str, total_spaces: int = 0,
                    **details) -> Address:
        return self.with_project(
            project_id,
            lambda p: capacity.add_address(p, name, full_address, total_spaces, **details),
        )

    def update_address(self, address_id: str, **updates) -> Address:
        return self.with_address(address_id, lambda a: capacity.update_address(a, **updates))

    def delete_address(self, address_id: str) -> Address:
        project = self.project_of_address(address_id)
        return self.with_project(project.id, lambda p: capacity.delete_address(p, address_id))

    # --- Rooms & spaces ---

    def add_room(self, address_id: str, name: str, room_type: str, total_spaces: int) -> Room:
        return self.with_address(address_id, lambda a: capacity.add_room(a, name, room_type, total_spaces))

    def generate_rooms(self, address_id: str, count: int, room_type: str = "male") -> List[Room]:
        return self.with_address(address_id, lambda a: capacity.generate_rooms(a, count, room_type))

    def update_room(self, room_id: str, name: Optional[str] = None, room_type: Optional[str] = None,
                    total_spaces: Optional[int] = None) -> Room:
        address = self.address_of_room(room_id)
        return self.with_address(
            address.id,
            lambda a: capacity.update_room(a, room_id, name, room_type, total_spaces),
        )

    def resize_room(self, room_id: str, new_count: int) -> Room:
        return self.update_room(room_id, total_spaces=new_count)

    def delete_room(self, room_id: str) -> Room:
        address = self.address_of_room(room_id)
        return self.with_address(address.id, lambda a: capacity.delete_room(a, room_id))

    def delete_space(self, space_id: str) -> Space:
        room = self.room_of_space(space_id)
        address = self.address_of_room(room.id)
        return self.with_address(address.id, lambda a: capacity.delete_space(_room_in(a, room.id), space_id))

    # --- Tenants ---

    def add_tenant(self, address_id: str, **tenant_data):
        return self.with_address(address_id, lambda a: assignment.add_tenant(a, **tenant_data))

    def select_tenant_for_room(self, room_id: str, tenant_id: str) -> Optional[Space]:
        """Place a tenant of the room's address; None when the room is full."""
        address = self.address_of_room(room_id)

        def _select(a: Address):
            tenant, _ = assignment.find_tenant(a, tenant_id)
            if tenant is None:
                raise NotFoundError("Tenant", tenant_id)
            return assignment.select_tenant_for_room(a, _room_in(a, room_id), tenant)

        return self.with_address(address.id, _select)

    def delete_tenant(self, tenant_id: str):
        _, address = self.locate_tenant(tenant_id)
        return self.with_address(address.id, lambda a: assignment.delete_tenant(a, tenant_id))

    def check_out_tenant(self, tenant_id: str, checkout_date: date, reason: str,
                         now: Optional[datetime] = None) -> EvictionArchiveEntry:
        project, address = self.locate_tenant(tenant_id)
        entry = self.with_project(
            project.id,
            lambda p: assignment.check_out_tenant(
                p, _address_in(p, address.id), tenant_id, checkout_date, reason, now,
            ),
        )
        self.append_archive_entry(entry)
        return entry

    def append_archive_entry(self, entry: EvictionArchiveEntry):
        self.archive.append(entry)

    # --- Notices ---

    def put_on_notice(self, space_id: str, period_days: Optional[int] = None,
                      start_date: Optional[date] = None):
        address = self.address_of_space(space_id)
        period = period_days if period_days is not None else notice.notice_period(address)
        return self.with_address(
            address.id, lambda a: notice.put_on_notice(_space_in(a, space_id), period, start_date),
        )

    def remove_from_notice(self, space_id: str):
        address = self.address_of_space(space_id)
        return self.with_address(address.id, lambda a: notice.remove_from_notice(_space_in(a, space_id)))

    def put_address_on_notice(self, address_id: str, now: Optional[datetime] = None) -> int:
        return self.with_address(address_id, lambda a: notice.put_address_on_notice(a, now))

    def remove_address_from_notice(self, address_id: str):
        return self.with_address(address_id, notice.remove_address_from_notice)

    def release_expired_notices(self, today: Optional[date] = None) -> int:
        return self.with_projects(lambda ps: notice.release_expired_notices(ps, today))

    # --- Queries ---

    def project_stats(self, project_id: str):
        return compute_project_stats(self.get_project(project_id))

    def portfolio_stats(self):
        return compute_portfolio_stats(self.projects)

    def conflicts(self, project_id: Optional[str] = None, now: Optional[datetime] = None) -> List[Conflict]:
        if project_id is not None:
            return detect_conflicts(self.get_project(project_id), now)
        return detect_all_conflicts(self.projects, now)

    def notices(self, now: Optional[datetime] = None):
        return notice.list_notices(self.projects, now)

    def calendar_events(self):
        return build_calendar_events(self.projects, self.archive)
