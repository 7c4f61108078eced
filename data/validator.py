"""Validation for form input and import documents."""

import re
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional
from config.defaults import GENDERS, ROOM_TYPES, OPERATORS, EXPORT_VERSION, BIRTH_YEAR_RANGE


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def fail(self, message: str):
        self.is_valid = False
        self.errors.append(message)


DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

TENANT_REQUIRED_FIELDS = ["first_name", "last_name", "gender", "birth_year", "check_in_date", "monthly_price"]

ADDRESS_REQUIRED_FIELDS = ["name", "full_address", "total_spaces"]


def is_valid_date(value) -> bool:
    """True for a real calendar date in YYYY-MM-DD form."""
    if isinstance(value, date):
        return True
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _parse_number(value) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip().replace(",", "."))
    except ValueError:
        return None


def _check_required(data: dict, required: List[str], label: str) -> ValidationResult:
    result = ValidationResult()
    missing = [key for key in required if data.get(key) is None or str(data.get(key)).strip() == ""]
    if missing:
        result.fail(f"{label}: Missing required fields: {', '.join(missing)}")
    return result


def validate_tenant_form(data: dict, today: Optional[date] = None) -> ValidationResult:
    result = _check_required(data, TENANT_REQUIRED_FIELDS, "Tenant")
    if not result.is_valid:
        return result

    today = today or date.today()

    if data["gender"] not in GENDERS:
        result.fail(f"Tenant: Gender must be one of {GENDERS}.")

    try:
        birth_year = int(data["birth_year"])
    except (TypeError, ValueError):
        result.fail("Tenant: Birth year must be a number.")
    else:
        if not today.year - BIRTH_YEAR_RANGE <= birth_year <= today.year:
            result.fail(f"Tenant: Birth year must be between {today.year - BIRTH_YEAR_RANGE} and {today.year}.")

    if not is_valid_date(data["check_in_date"]):
        result.fail("Tenant: Check-in date must use the YYYY-MM-DD format.")

    # work start may lie in the future
    work_start = data.get("work_start_date")
    if work_start and not is_valid_date(work_start):
        result.fail("Tenant: Work start date must use the YYYY-MM-DD format.")

    price = _parse_number(data["monthly_price"])
    if price is None:
        result.fail("Tenant: Monthly price must be a number.")
    elif price < 0:
        result.fail("Tenant: Monthly price cannot be negative.")

    return result


def validate_address_form(data: dict) -> ValidationResult:
    result = _check_required(data, ADDRESS_REQUIRED_FIELDS, "Address")
    if not result.is_valid:
        return result

    total = _parse_number(data["total_spaces"])
    if total is None or total < 0 or total != int(total):
        result.fail("Address: Total spaces must be a whole number, zero or more.")

    period = data.get("eviction_period")
    if period is not None:
        period = _parse_number(period)
        if period is None or period <= 0:
            result.fail("Address: Eviction period must be a positive number of days.")

    for key in ("price_per_space", "couple_price", "total_cost"):
        value = data.get(key)
        if value not in (None, ""):
            number = _parse_number(value)
            if number is None or number < 0:
                result.fail(f"Address: {key} must be a non-negative number.")

    operator = data.get("operator")
    if operator is not None and operator not in OPERATORS:
        result.fail(f"Address: Operator must be one of {OPERATORS}.")
    elif operator == "other" and not str(data.get("operator_name", "")).strip():
        result.warnings.append("Address: Operator 'other' without a name is shown as no operator.")

    return result


def validate_room_form(data: dict, min_spaces: int = 1) -> ValidationResult:
    result = _check_required(data, ["name", "room_type", "total_spaces"], "Room")
    if not result.is_valid:
        return result

    if data["room_type"] not in ROOM_TYPES:
        result.fail(f"Room: Type must be one of {ROOM_TYPES}.")

    try:
        total = int(data["total_spaces"])
    except (TypeError, ValueError):
        result.fail("Room: Number of spaces must be a whole number.")
    else:
        if total < min_spaces:
            result.fail(f"Room: Number of spaces must be at least {min_spaces}.")

    return result


def validate_import_document(doc) -> ValidationResult:
    """Structural check of an export document before anything is replaced."""
    result = ValidationResult()
    if not isinstance(doc, dict):
        result.fail("Import: File must contain a JSON object.")
        return result

    if "projects" not in doc:
        result.fail("Import: Missing 'projects' array.")
    elif not isinstance(doc["projects"], list):
        result.fail("Import: 'projects' must be an array.")

    archive = doc.get("evictionArchive")
    if archive is not None and not isinstance(archive, list):
        result.fail("Import: 'evictionArchive' must be an array.")

    version = doc.get("version")
    if version is not None and version != EXPORT_VERSION:
        result.warnings.append(f"Import: File version {version} differs from {EXPORT_VERSION}.")

    return result
