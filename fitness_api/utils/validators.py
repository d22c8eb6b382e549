"""
Validation utilities
"""
import re
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from fitness_api.utils.errors import ValidationFailed

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Signed 64-bit range accepted by the database drivers
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def utc_now_iso() -> str:
    """Current UTC time as 2024-01-15T08:30:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_int(value: Optional[str], code: str, message: str = "Valid ID is required") -> int:
    """
    Parse a path or query value as an integer

    Raises:
        ValidationFailed: If value is missing, not an integer or outside
            the 64-bit range
    """
    if value is None:
        raise ValidationFailed(message, code)
    try:
        parsed = int(str(value).strip())
    except ValueError:
        raise ValidationFailed(message, code)
    if not INT64_MIN <= parsed <= INT64_MAX:
        raise ValidationFailed(message, code)
    return parsed


def parse_optional_int(value: Optional[str], code: str, message: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return parse_int(value, code, message)


def validate_email(email: str) -> str:
    """
    Normalize and validate an email address

    Returns:
        Lowercased, trimmed email
    """
    email = email.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValidationFailed("Invalid email format", "INVALID_EMAIL_FORMAT")
    return email


def require_text(value: Optional[str], code: str, message: str) -> str:
    """Reject missing or blank strings, return the trimmed value"""
    if value is None or not value.strip():
        raise ValidationFailed(message, code)
    return value.strip()


def trim_or_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def check_min(value: Optional[float], minimum: float, code: str, message: str, inclusive: bool = True):
    """Range check that lets None through"""
    if value is None:
        return
    if value < minimum or (not inclusive and value == minimum):
        raise ValidationFailed(message, code)


def validate_date(value: Optional[str], code: str, message: str) -> Optional[str]:
    """Accept ISO dates or datetimes, reject anything unparseable"""
    if value is None or value == "":
        return None
    try:
        datetime.fromisoformat(value.strip())
    except ValueError:
        raise ValidationFailed(message, code)
    return value.strip()


def validate_choice(value: Optional[str], choices: Iterable[str], code: str) -> Optional[str]:
    if value is None:
        return None
    choices = tuple(choices)
    if value not in choices:
        raise ValidationFailed(f"Status must be one of: {', '.join(choices)}", code)
    return value


# Fields whose error codes use a shorter name than the field itself
FIELD_CODE_NAMES = {
    "DURATION_MINUTES": "DURATION",
    "CALORIES_BURNED": "CALORIES",
    "WEIGHT_LBS": "WEIGHT",
    "RECORDED_DATE": "DATE",
}


def field_error_code(field: Any, missing: bool) -> str:
    """
    Derive an error code from a body field name

    workoutType -> MISSING_WORKOUT_TYPE / INVALID_WORKOUT_TYPE
    durationMinutes -> MISSING_DURATION / INVALID_DURATION
    """
    name = re.sub(r"(?<!^)(?=[A-Z])", "_", str(field)).upper()
    name = FIELD_CODE_NAMES.get(name, name)
    return f"{'MISSING' if missing else 'INVALID'}_{name}"
