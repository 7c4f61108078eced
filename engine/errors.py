"""Error kinds raised by the housing core. Every one aborts without mutating the tree."""


class HousingError(Exception):
    """Base class for recoverable housing-core failures."""


class NotFoundError(HousingError):
    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} not found: {entity_id}")


class CapacityExceededError(HousingError):
    def __init__(self, requested_total: int, limit: int):
        self.requested_total = requested_total
        self.limit = limit
        self.over_limit = requested_total - limit
        super().__init__(
            f"Total room spaces ({requested_total}) would exceed the address limit ({limit}) "
            f"by {self.over_limit}"
        )


class SpacesOccupiedError(HousingError):
    def __init__(self, requested: int, unfreed: int):
        self.requested = requested
        self.unfreed = unfreed
        super().__init__(
            f"Cannot remove {requested} spaces: {unfreed} of them are occupied or on notice"
        )


class RoomOccupiedError(HousingError):
    def __init__(self, room_name: str, tenant_count: int):
        self.room_name = room_name
        self.tenant_count = tenant_count
        super().__init__(f"Room '{room_name}' still has {tenant_count} tenant(s)")


class SpaceNotVacantError(HousingError):
    def __init__(self, space_number: int, status: str):
        self.space_number = space_number
        self.status = status
        super().__init__(f"Space {space_number} is {status}, only vacant spaces can be deleted")


class InvalidImportStructureError(HousingError):
    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("Invalid import file: " + "; ".join(self.errors))
