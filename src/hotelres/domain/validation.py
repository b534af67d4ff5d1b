"""Input validation for booking requests.

Each check raises ValidationError naming the offending field (or rule) with
the message shown to the guest. Callers run the checks in a fixed order so
the first failure reported is deterministic.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Iterable, Mapping

from hotelres.domain.errors import ValidationError

_EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}$")
_PHONE_PATTERN = re.compile(r"^[\d\s\-+()]+$")

PHONE_MIN_LENGTH = 10

_ASCII_DIGITS = re.compile(r"^[0-9]+$")
_ISO_DATE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")

FIELD_LABELS = {
    "room_id": "Room ID",
    "full_name": "Full name",
    "email": "Email",
    "phone": "Phone number",
    "check_in_date": "Check-in date",
    "check_out_date": "Check-out date",
    "guests": "Number of guests",
    "reservation_id": "Reservation ID",
    "special_requests": "Special requests",
}


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty after stripping."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def clean_text(value: Any) -> str | None:
    """Strip a free-text value; blanks become None."""
    if is_blank(value):
        return None
    return str(value).strip()


def require_fields(values: Mapping[str, Any], fields: Iterable[str]) -> None:
    """Raise for the first field in ``fields`` that is missing or blank."""
    for field in fields:
        if is_blank(values.get(field)):
            label = FIELD_LABELS.get(field, field)
            raise ValidationError(field, f"{label} is required")


def text_field(value: Any, field: str) -> str | None:
    """Like clean_text, but a non-string value is a ValidationError."""
    if value is not None and not isinstance(value, str):
        label = FIELD_LABELS.get(field, field)
        raise ValidationError(field, f"{label} must be text")
    return clean_text(value)


def parse_positive_int(value: Any, field: str) -> int:
    """Coerce an identifier or count to a positive int.

    Accepts ints and digit strings. Booleans and floats with a fraction are
    rejected.
    """
    label = FIELD_LABELS.get(field, field)
    message = f"{label} must be a positive whole number"

    if isinstance(value, bool):
        raise ValidationError(field, message)
    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str) and _ASCII_DIGITS.match(value.strip()):
        number = int(value.strip())
    else:
        raise ValidationError(field, message)

    if number <= 0:
        raise ValidationError(field, message)
    return number


def validate_email(value: Any) -> str:
    email = str(value).strip()
    if not _EMAIL_PATTERN.match(email) or ".." in email:
        raise ValidationError("email", "Invalid email format")
    return email


def validate_phone(value: Any) -> str:
    """Digits, spaces, + - ( ) only, and at least PHONE_MIN_LENGTH characters."""
    phone = str(value).strip()
    if not _PHONE_PATTERN.match(phone) or len(phone) < PHONE_MIN_LENGTH:
        raise ValidationError("phone", "Invalid phone number format")
    return phone


def parse_date(value: Any, field: str) -> date:
    """Parse an ISO ``YYYY-MM-DD`` date (a date instance passes through)."""
    if isinstance(value, date):
        return value
    label = FIELD_LABELS.get(field, field)
    message = f"{label} must be a valid date (YYYY-MM-DD)"
    text = str(value).strip()
    if not _ISO_DATE.match(text):
        raise ValidationError(field, message)
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError(field, message)


def validate_stay(check_in_value: Any, check_out_value: Any, *, today: date) -> tuple[date, date]:
    """Parse and check a [check_in, check_out) stay.

    Order: parse both dates, then check_out > check_in, then check_in >= today.

    Returns:
        (check_in, check_out)
    """
    check_in = parse_date(check_in_value, "check_in_date")
    check_out = parse_date(check_out_value, "check_out_date")

    if check_in >= check_out:
        raise ValidationError("date_order", "Check-out date must be after check-in date")

    if check_in < today:
        raise ValidationError("date_in_past", "Check-in date cannot be in the past")

    return check_in, check_out
