"""Reservation endpoints.

POST /reservations          → create (201)
POST /reservations/cancel   → cancel by id, optional email ownership check
POST /reservations/lookup   → list by email and/or phone (JSON body)
GET  /reservations/lookup   → same, via query string
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from hotelres.api.envelope import success
from hotelres.domain import booking, cancellation, lookup

router = APIRouter(prefix="/reservations", tags=["reservations"])


class CreateReservationRequest(BaseModel):
    """Request body for a new booking.

    Fields are untyped so that presence, type and format are all judged by
    the domain checks, in their fixed order.
    """

    model_config = ConfigDict(extra="ignore")

    room_id: Any = None
    full_name: Any = None
    email: Any = None
    phone: Any = None
    check_in_date: Any = None
    check_out_date: Any = None
    guests: Any = None
    special_requests: Any = None


class CancelReservationRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    reservation_id: Any = None
    email: Any = None


class LookupReservationsRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: Any = None
    phone: Any = None


@router.post("")
def create_reservation(body: CreateReservationRequest) -> JSONResponse:
    reservation = booking.create_reservation(**body.model_dump())
    return success(reservation, "Reservation created successfully!", status_code=201)


@router.post("/cancel")
def cancel_reservation(body: CancelReservationRequest) -> JSONResponse:
    result = cancellation.cancel_reservation(body.reservation_id, email=body.email)
    return success(result, "Reservation cancelled successfully")


def _lookup_response(email: str | None, phone: str | None) -> JSONResponse:
    reservations = lookup.lookup_reservations(email=email, phone=phone)
    message = (
        "Reservations retrieved successfully" if reservations else "No reservations found"
    )
    return success(reservations, message, count=len(reservations))


@router.post("/lookup")
def lookup_reservations(body: LookupReservationsRequest) -> JSONResponse:
    """Find reservations by guest contact (both fields are ANDed)."""
    return _lookup_response(body.email, body.phone)


@router.get("/lookup")
def lookup_reservations_query(
    email: str | None = Query(None),
    phone: str | None = Query(None),
) -> JSONResponse:
    """Query-string variant of POST /reservations/lookup."""
    return _lookup_response(email, phone)
