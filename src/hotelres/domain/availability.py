"""Availability engine.

A room type has ``total_rooms`` interchangeable units. For a requested stay
[check_in, check_out) its remaining capacity is total_rooms minus the number
of non-cancelled reservations on it that overlap the stay.

Overlap formula:  (existing_checkin < new_checkout) AND (existing_checkout > new_checkin)
Strict inequality allows check-out day == check-in day (touching dates are OK).
"""

from __future__ import annotations

from datetime import date
from typing import Any

from psycopg2.extensions import connection as PgConnection

from hotelres.domain.catalog import room_to_dict
from hotelres.domain.errors import ValidationError
from hotelres.domain.validation import is_blank, parse_positive_int, validate_stay
from hotelres.infra.db import txn
from hotelres.infra.repositories.rooms_repository import list_rooms_with_booked_count
from hotelres.infra.time import today


def overlaps(
    existing_check_in: date,
    existing_check_out: date,
    check_in: date,
    check_out: date,
) -> bool:
    """True if half-open stays [existing_check_in, existing_check_out) and
    [check_in, check_out) share at least one night."""
    return existing_check_in < check_out and existing_check_out > check_in


def remaining_capacity(total_rooms: int, booked_count: int) -> int:
    """Units still free; never negative."""
    return max(int(total_rooms) - int(booked_count), 0)


def check_availability(
    *,
    check_in_date: Any,
    check_out_date: Any,
    room_id: Any = None,
    conn: PgConnection | None = None,
) -> dict:
    """List rooms with at least one free unit for the stay.

    Args:
        check_in_date: Check-in (ISO date string or date), inclusive.
        check_out_date: Check-out (ISO date string or date), exclusive.
        room_id: Optional room filter.
        conn: Optional connection (a new one is opened otherwise).

    Returns:
        {"rooms": [room dict + "available_rooms"], "check_in_date": str,
         "check_out_date": str}. An empty list means nothing is free.

    Raises:
        ValidationError: Missing dates, bad order, check-in in the past,
            malformed room_id.
    """
    if is_blank(check_in_date) or is_blank(check_out_date):
        field = "check_in_date" if is_blank(check_in_date) else "check_out_date"
        raise ValidationError(field, "Check-in and check-out dates are required")

    check_in, check_out = validate_stay(check_in_date, check_out_date, today=today())

    room_filter = None if is_blank(room_id) else parse_positive_int(room_id, "room_id")

    with txn(conn) as cur:
        rows = list_rooms_with_booked_count(
            cur,
            check_in=check_in,
            check_out=check_out,
            room_id=room_filter,
        )

    rooms = []
    for row in rows:
        room = room_to_dict(row[:10])
        room["available_rooms"] = remaining_capacity(room["total_rooms"], row[10])
        if room["available_rooms"] > 0:
            rooms.append(room)

    return {
        "rooms": rooms,
        "check_in_date": check_in.isoformat(),
        "check_out_date": check_out.isoformat(),
    }
