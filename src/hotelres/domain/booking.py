"""Reservation creation - transactional booking with zero overbooking.

Validation runs first, in a fixed order, without touching the database.
Then, inside a single transaction:
lock room → check guests vs capacity → count overlapping stays → insert.

The room row lock (SELECT ... FOR UPDATE) queues concurrent bookings for the
same room, so two requests can never both see the last free unit. Any
failure inside the transaction rolls it back; nothing is written.
"""

from __future__ import annotations

from typing import Any

from psycopg2.extensions import connection as PgConnection

from hotelres.domain.availability import remaining_capacity
from hotelres.domain.catalog import money
from hotelres.domain.errors import ConflictError, NotFoundError, ValidationError
from hotelres.domain.validation import (
    parse_positive_int,
    require_fields,
    text_field,
    validate_email,
    validate_phone,
    validate_stay,
)
from hotelres.infra.db import txn
from hotelres.infra.repositories.reservations_repository import (
    count_overlapping,
    insert_reservation,
)
from hotelres.infra.repositories.rooms_repository import lock_room
from hotelres.infra.time import today
from hotelres.observability.correlation import get_correlation_id
from hotelres.observability.logging import get_logger
from hotelres.observability.redaction import safe_log_context

logger = get_logger(__name__)

REQUIRED_FIELDS = (
    "room_id",
    "full_name",
    "email",
    "phone",
    "check_in_date",
    "check_out_date",
    "guests",
)


def create_reservation(
    *,
    room_id: Any = None,
    full_name: Any = None,
    email: Any = None,
    phone: Any = None,
    check_in_date: Any = None,
    check_out_date: Any = None,
    guests: Any = None,
    special_requests: Any = None,
    conn: PgConnection | None = None,
) -> dict:
    """Validate and persist a confirmed reservation.

    Check order (first failure wins):
    1. required fields present (room_id/guests must be positive integers)
    2. email format
    3. phone format
    4. check_out after check_in
    5. check_in not in the past
    6. room exists
    7. guests within room.max_guests
    8. a unit is free for the whole stay

    Returns:
        The persisted reservation as a JSON-ready dict, including
        ``reservation_id``, ``nights``, ``total_price`` and ``status``.

    Raises:
        ValidationError: Steps 1-5 and 7.
        NotFoundError: Step 6.
        ConflictError: Step 8.
        StorageError: Connection or transaction failure.
    """
    values = {
        "room_id": room_id,
        "full_name": full_name,
        "email": email,
        "phone": phone,
        "check_in_date": check_in_date,
        "check_out_date": check_out_date,
        "guests": guests,
    }
    require_fields(values, REQUIRED_FIELDS)
    room_id = parse_positive_int(room_id, "room_id")
    guests = parse_positive_int(guests, "guests")
    full_name = text_field(full_name, "full_name")

    email = validate_email(email)
    phone = validate_phone(phone)
    check_in, check_out = validate_stay(check_in_date, check_out_date, today=today())
    special_requests = text_field(special_requests, "special_requests")

    nights = (check_out - check_in).days

    with txn(conn) as cur:
        room = lock_room(cur, room_id)
        if room is None:
            raise NotFoundError("room", "Room not found")

        _, room_name, price_per_night, total_rooms, max_guests = room

        if guests > max_guests:
            raise ValidationError(
                "capacity",
                f"Number of guests exceeds room capacity (max: {max_guests})",
            )

        booked = count_overlapping(
            cur, room_id=room_id, check_in=check_in, check_out=check_out
        )
        if remaining_capacity(total_rooms, booked) <= 0:
            logger.warning(
                "booking rejected: no availability",
                extra={
                    "extra_fields": safe_log_context(
                        correlationId=get_correlation_id(),
                        room_id=room_id,
                        check_in=check_in,
                        check_out=check_out,
                        total_rooms=total_rooms,
                        booked_count=booked,
                    )
                },
            )
            raise ConflictError(
                "no_availability",
                "No rooms available for selected dates. Please choose different dates.",
            )

        total_price = price_per_night * nights

        reservation_id, created_at, updated_at = insert_reservation(
            cur,
            room_id=room_id,
            full_name=full_name,
            email=email,
            phone=phone,
            check_in=check_in,
            check_out=check_out,
            guests=guests,
            special_requests=special_requests,
            total_price=total_price,
            nights=nights,
        )

    logger.info(
        "reservation created",
        extra={
            "extra_fields": safe_log_context(
                correlationId=get_correlation_id(),
                reservation_id=reservation_id,
                room_id=room_id,
                nights=nights,
                guests=guests,
                email=email,
            )
        },
    )

    return {
        "reservation_id": reservation_id,
        "room_id": room_id,
        "room_name": room_name,
        "full_name": full_name,
        "email": email,
        "phone": phone,
        "check_in_date": check_in.isoformat(),
        "check_out_date": check_out.isoformat(),
        "guests": guests,
        "nights": nights,
        "price_per_night": money(price_per_night),
        "total_price": money(total_price),
        "status": "confirmed",
        "special_requests": special_requests,
        "created_at": created_at.isoformat() if created_at is not None else None,
        "updated_at": updated_at.isoformat() if updated_at is not None else None,
    }
