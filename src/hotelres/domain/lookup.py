"""Reservation lookup by guest contact."""

from __future__ import annotations

from typing import Any

from psycopg2.extensions import connection as PgConnection

from hotelres.domain.catalog import money
from hotelres.domain.errors import ValidationError
from hotelres.domain.validation import clean_text
from hotelres.infra.db import txn
from hotelres.infra.repositories.reservations_repository import find_by_contact


def _reservation_to_dict(row: tuple) -> dict:
    return {
        "id": int(row[0]),
        "room_id": int(row[1]),
        "room_name": row[2],
        "room_type": row[3],
        "image_url": row[4],
        "full_name": row[5],
        "email": row[6],
        "phone": row[7],
        "check_in_date": row[8].isoformat(),
        "check_out_date": row[9].isoformat(),
        "guests": int(row[10]),
        "special_requests": row[11],
        "total_price": money(row[12]),
        "nights": int(row[13]),
        "status": row[14],
        "created_at": row[15].isoformat() if row[15] is not None else None,
    }


def lookup_reservations(
    *,
    email: Any = None,
    phone: Any = None,
    conn: PgConnection | None = None,
) -> list[dict]:
    """Find a guest's reservations, newest first.

    At least one of email/phone is required; when both are given a
    reservation must match both. No matches is an empty list, not an error.

    Raises:
        ValidationError: Neither email nor phone supplied.
    """
    email = clean_text(email)
    phone = clean_text(phone)

    if email is None and phone is None:
        raise ValidationError(
            "contact",
            "Email or phone number is required to retrieve reservations",
        )

    with txn(conn) as cur:
        rows = find_by_contact(cur, email=email, phone=phone)

    return [_reservation_to_dict(row) for row in rows]
