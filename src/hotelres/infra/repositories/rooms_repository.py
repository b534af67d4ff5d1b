"""Rooms repository - read access to the room catalog.

Uses raw SQL with psycopg2 (no ORM).
"""

from datetime import date
from typing import Any

from psycopg2.extensions import cursor as PgCursor

from hotelres.infra.db import fetchall, for_update

# Column order shared by every room projection; see domain.catalog.room_to_dict
ROOM_COLUMNS = """
    r.id, r.room_name, r.room_type, r.price_per_night, r.description,
    r.image_url, r.total_rooms, r.max_guests, r.features, r.created_at
"""


def list_rooms(cur: PgCursor) -> list[tuple[Any, ...]]:
    """Fetch every room, cheapest first."""
    return fetchall(
        cur,
        f"""
        SELECT {ROOM_COLUMNS}
        FROM rooms r
        ORDER BY r.price_per_night ASC, r.id ASC
        """,
    )


def list_rooms_with_booked_count(
    cur: PgCursor,
    *,
    check_in: date,
    check_out: date,
    room_id: int | None = None,
) -> list[tuple[Any, ...]]:
    """Fetch rooms with spare capacity in [check_in, check_out).

    Each row is the room projection followed by ``booked_count``: the number
    of non-cancelled reservations on that room overlapping the period.

    Overlap formula: existing.check_in < new.check_out AND existing.check_out > new.check_in

    Args:
        cur: Database cursor.
        check_in: Requested check-in (inclusive).
        check_out: Requested check-out (exclusive).
        room_id: Restrict to a single room.

    Returns:
        Rows whose total_rooms - booked_count > 0, cheapest first.
    """
    conditions = ["r.total_rooms - COALESCE(b.booked_count, 0) > 0"]
    params: list = [check_out, check_in]

    if room_id is not None:
        conditions.append("r.id = %s")
        params.append(room_id)

    where = " AND ".join(conditions)

    return fetchall(
        cur,
        f"""
        SELECT {ROOM_COLUMNS}, COALESCE(b.booked_count, 0) AS booked_count
        FROM rooms r
        LEFT JOIN (
            SELECT room_id, COUNT(*) AS booked_count
            FROM reservations
            WHERE status <> 'cancelled'
              AND check_in_date < %s
              AND check_out_date > %s
            GROUP BY room_id
        ) b ON b.room_id = r.id
        WHERE {where}
        ORDER BY r.price_per_night ASC, r.id ASC
        """,
        params,
    )


def lock_room(cur: PgCursor, room_id: int) -> tuple[Any, ...] | None:
    """Lock a room row for the rest of the transaction.

    Every booking transaction for the same room queues on this lock, so the
    capacity check and the insert that follows it are serialized per room.

    Returns:
        (id, room_name, price_per_night, total_rooms, max_guests) or None.
    """
    return for_update(
        cur,
        """
        SELECT id, room_name, price_per_night, total_rooms, max_guests
        FROM rooms
        WHERE id = %s
        """,
        (room_id,),
    )
