"""Cancel reservation domain logic.

Orchestrates cancellation inside a single DB transaction:
lock → verify ownership → validate state → update status.

Reservations are never deleted; confirmed → cancelled is one-way.
"""

from __future__ import annotations

from typing import Any

from psycopg2.extensions import connection as PgConnection

from hotelres.domain.errors import ConflictError, NotFoundError
from hotelres.domain.validation import clean_text, parse_positive_int, require_fields
from hotelres.infra.db import txn
from hotelres.infra.repositories.reservations_repository import (
    lock_reservation,
    mark_cancelled,
)
from hotelres.infra.time import today
from hotelres.observability.correlation import get_correlation_id
from hotelres.observability.logging import get_logger
from hotelres.observability.redaction import safe_log_context

logger = get_logger(__name__)

_NOT_FOUND_MESSAGE = "Reservation not found or email does not match"
_ALREADY_CANCELLED_MESSAGE = "This reservation has already been cancelled"


def cancel_reservation(
    reservation_id: Any = None,
    *,
    email: Any = None,
    conn: PgConnection | None = None,
) -> dict:
    """Cancel a confirmed reservation.

    When ``email`` is given it must match the stored address
    (case-insensitive); a mismatch is reported exactly like a missing
    reservation so existence is not leaked.

    Returns:
        {"reservation_id": int, "guest_name": str, "email": str,
         "status": "cancelled"}

    Raises:
        ValidationError: reservation_id missing or malformed.
        NotFoundError: No such reservation, or email mismatch.
        ConflictError: already_cancelled, or past_check_in when the check-in
            date is before today.
    """
    require_fields({"reservation_id": reservation_id}, ("reservation_id",))
    reservation_id = parse_positive_int(reservation_id, "reservation_id")
    email = clean_text(email)

    with txn(conn) as cur:
        row = lock_reservation(cur, reservation_id)

        if row is None:
            raise NotFoundError("reservation", _NOT_FOUND_MESSAGE)

        _, full_name, stored_email, status, room_id, check_in = row

        if email is not None and stored_email.lower() != email.lower():
            raise NotFoundError("reservation", _NOT_FOUND_MESSAGE)

        if status == "cancelled":
            raise ConflictError("already_cancelled", _ALREADY_CANCELLED_MESSAGE)

        if check_in < today():
            raise ConflictError(
                "past_check_in",
                "Cannot cancel a reservation with a past check-in date",
            )

        if mark_cancelled(cur, reservation_id) is None:
            raise ConflictError("already_cancelled", _ALREADY_CANCELLED_MESSAGE)

    logger.info(
        "reservation cancelled",
        extra={
            "extra_fields": safe_log_context(
                correlationId=get_correlation_id(),
                reservation_id=reservation_id,
                room_id=room_id,
                check_in=check_in,
            )
        },
    )

    return {
        "reservation_id": reservation_id,
        "guest_name": full_name,
        "email": stored_email,
        "status": "cancelled",
    }
