"""Reservations repository - persistence for reservation records.

Uses raw SQL with psycopg2 (no ORM). Reservations are never deleted; the
only mutation after insert is confirmed -> cancelled.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from psycopg2.extensions import cursor as PgCursor

from hotelres.infra.db import fetchall, fetchone, for_update


def count_overlapping(
    cur: PgCursor,
    *,
    room_id: int,
    check_in: date,
    check_out: date,
) -> int:
    """Count non-cancelled reservations on a room overlapping [check_in, check_out).

    Strict inequalities: a stay ending on check_in does not overlap.
    """
    row = fetchone(
        cur,
        """
        SELECT COUNT(*)
        FROM reservations
        WHERE room_id = %s
          AND status <> 'cancelled'
          AND check_in_date < %s
          AND check_out_date > %s
        """,
        (room_id, check_out, check_in),
    )
    return int(row[0]) if row else 0


def insert_reservation(
    cur: PgCursor,
    *,
    room_id: int,
    full_name: str,
    email: str,
    phone: str,
    check_in: date,
    check_out: date,
    guests: int,
    special_requests: str | None,
    total_price: Decimal,
    nights: int,
) -> tuple[int, datetime, datetime]:
    """Insert a confirmed reservation.

    Returns:
        Tuple of (reservation_id, created_at, updated_at).
    """
    cur.execute(
        """
        INSERT INTO reservations (
            room_id, full_name, email, phone, check_in_date, check_out_date,
            guests, special_requests, total_price, nights, status
        )
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, 'confirmed')
        RETURNING id, created_at, updated_at
        """,
        (
            room_id,
            full_name,
            email,
            phone,
            check_in,
            check_out,
            guests,
            special_requests,
            total_price,
            nights,
        ),
    )
    row = cur.fetchone()
    return (int(row[0]), row[1], row[2])


def lock_reservation(cur: PgCursor, reservation_id: int) -> tuple[Any, ...] | None:
    """Lock a reservation row for a status change.

    Returns:
        (id, full_name, email, status, room_id, check_in_date) or None.
    """
    return for_update(
        cur,
        """
        SELECT id, full_name, email, status, room_id, check_in_date
        FROM reservations
        WHERE id = %s
        """,
        (reservation_id,),
    )


def mark_cancelled(cur: PgCursor, reservation_id: int) -> datetime | None:
    """Set status to cancelled and refresh updated_at.

    Returns:
        The new updated_at, or None if the row was already cancelled.
    """
    row = fetchone(
        cur,
        """
        UPDATE reservations
        SET status = 'cancelled', updated_at = now()
        WHERE id = %s AND status = 'confirmed'
        RETURNING updated_at
        """,
        (reservation_id,),
    )
    return row[0] if row else None


def find_by_contact(
    cur: PgCursor,
    *,
    email: str | None = None,
    phone: str | None = None,
) -> list[tuple[Any, ...]]:
    """Fetch reservations for a guest, joined with room display fields.

    Both filters are ANDed when given. Email matches case-insensitively.

    Returns:
        Rows ordered newest first:
        (id, room_id, room_name, room_type, image_url, full_name, email, phone,
         check_in_date, check_out_date, guests, special_requests, total_price,
         nights, status, created_at)
    """
    conditions: list[str] = []
    params: list = []

    if email:
        conditions.append("lower(r.email) = lower(%s)")
        params.append(email)

    if phone:
        conditions.append("r.phone = %s")
        params.append(phone)

    if not conditions:
        raise ValueError("find_by_contact requires email or phone")

    where = " AND ".join(conditions)

    return fetchall(
        cur,
        f"""
        SELECT r.id, r.room_id, ro.room_name, ro.room_type, ro.image_url,
               r.full_name, r.email, r.phone, r.check_in_date, r.check_out_date,
               r.guests, r.special_requests, r.total_price, r.nights, r.status,
               r.created_at
        FROM reservations r
        JOIN rooms ro ON ro.id = r.room_id
        WHERE {where}
        ORDER BY r.created_at DESC, r.id DESC
        """,
        params,
    )
