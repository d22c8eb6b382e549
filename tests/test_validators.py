import pytest

from fitness_api.utils.errors import ValidationFailed
from fitness_api.utils.validators import (
    field_error_code,
    parse_int,
    utc_now_iso,
    validate_choice,
    validate_date,
    validate_email,
)


@pytest.mark.parametrize("field, missing, expected", [
    ("workoutType", True, "MISSING_WORKOUT_TYPE"),
    ("durationMinutes", True, "MISSING_DURATION"),
    ("caloriesBurned", False, "INVALID_CALORIES"),
    ("weightLbs", False, "INVALID_WEIGHT"),
    ("recordedDate", True, "MISSING_DATE"),
    ("daysLeft", False, "INVALID_DAYS_LEFT"),
    ("name", True, "MISSING_NAME"),
])
def test_field_error_code(field, missing, expected):
    assert field_error_code(field, missing) == expected


@pytest.mark.parametrize("value", ["99999999999999999999", "-99999999999999999999", "9223372036854775808"])
def test_parse_int_rejects_values_outside_64_bits(value):
    with pytest.raises(ValidationFailed) as excinfo:
        parse_int(value, "INVALID_USER_ID")
    assert excinfo.value.code == "INVALID_USER_ID"


def test_parse_int_accepts_64_bit_bounds():
    assert parse_int("9223372036854775807", "INVALID_ID") == 2 ** 63 - 1
    assert parse_int("-9223372036854775808", "INVALID_ID") == -(2 ** 63)


def test_parse_int_rejects_trailing_garbage():
    assert parse_int(" 12 ", "INVALID_ID") == 12
    with pytest.raises(ValidationFailed) as excinfo:
        parse_int("12abc", "INVALID_ID")
    assert excinfo.value.code == "INVALID_ID"
    assert excinfo.value.http_status == 400


def test_validate_email():
    assert validate_email("  Sarah.J@Fitness.COM ") == "sarah.j@fitness.com"
    for bad in ("plain", "a@b", "a b@c.com", "@c.com"):
        with pytest.raises(ValidationFailed):
            validate_email(bad)


def test_validate_date():
    assert validate_date("2024-10-01", "INVALID_START_DATE", "bad") == "2024-10-01"
    assert validate_date(None, "INVALID_START_DATE", "bad") is None
    with pytest.raises(ValidationFailed) as excinfo:
        validate_date("yesterday", "INVALID_START_DATE", "bad")
    assert excinfo.value.code == "INVALID_START_DATE"


def test_validate_choice():
    assert validate_choice("completed", ("in_progress", "completed"), "INVALID_STATUS") == "completed"
    with pytest.raises(ValidationFailed):
        validate_choice("paused", ("in_progress", "completed"), "INVALID_STATUS")


def test_utc_now_iso_format():
    stamp = utc_now_iso()
    assert stamp.endswith("Z")
    assert len(stamp) == len("2024-01-15T08:30:00.000Z")
