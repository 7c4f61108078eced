"""Default configuration constants for the Housing Management core."""

# Notice period ("wypowiedzenie") length in days when the address sets none
DEFAULT_EVICTION_PERIOD_DAYS = 14

# Storage keys for the two persisted blobs
PROJECTS_STORAGE_KEY = "housing_management_data"
ARCHIVE_STORAGE_KEY = "eviction_archive"

# Export/import document format
EXPORT_VERSION = "1.0"

# Date format used for every date-only field (check-in, notice bounds, ...)
DATE_FORMAT = "%Y-%m-%d"

# Allowed values
ROOM_TYPES = ["male", "female", "couple"]
GENDERS = ["male", "female"]
EVICTION_REASONS = ["job_change", "own_housing", "disciplinary", "relocation"]
OPERATORS = ["rent_planet", "e_port", "other"]

# Display labels
OPERATOR_NAMES = {
    "rent_planet": "Rent Planet",
    "e_port": "E-Port",
}
NO_OPERATOR_LABEL = "Brak operatora"

ROOM_TYPE_LABELS = {
    "male": "Męski",
    "female": "Żeński",
    "couple": "Dla par",
}

EVICTION_REASON_LABELS = {
    "job_change": "Zmiana pracy",
    "own_housing": "Własne mieszkanie",
    "disciplinary": "Dyscyplinarna",
    "relocation": "Przeniesienie",
}

CONFLICT_TYPE_LABELS = {
    "no_room": "Brak miejsca",
    "notice_overdue": "Wypowiedzenie przeterminowane",
}

# Conflict messages
NO_ROOM_MESSAGE = "Określ pokój dla {first} {last}"
NOTICE_OVERDUE_MESSAGE = "Zwolnij miejsce lub przenieś {first} {last}"

# Auto-generated room names
GENERATED_ROOM_NAME = "Pokój {n}"

# Tenant section titles for the selection view
UNASSIGNED_SECTION_TITLE = "Bez pokoju"
ASSIGNED_SECTION_TITLE = "Już zakwaterowani"

# Birth year selector covers this many years back from the current year
BIRTH_YEAR_RANGE = 100

# Tenant report columns
TENANT_REPORT_COLUMNS = [
    "Projekt",
    "Adres",
    "Pokój",
    "Miejsce",
    "Imię",
    "Nazwisko",
    "Płeć",
    "Rok urodzenia",
    "Data zameldowania",
    "Cena",
]

ARCHIVE_REPORT_COLUMNS = [
    "Imię",
    "Nazwisko",
    "Projekt",
    "Adres",
    "Pokój",
    "Data zameldowania",
    "Data wymeldowania",
    "Powód",
]

CALENDAR_EVENT_LABELS = {
    "check_in": "Zameldowanie",
    "notice_end": "Koniec wypowiedzenia",
    "check_out": "Wymeldowanie",
}
