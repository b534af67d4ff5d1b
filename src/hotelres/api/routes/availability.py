"""Availability endpoint.

POST /availability → rooms with at least one free unit for a stay.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from hotelres.api.envelope import success
from hotelres.domain import availability

router = APIRouter(prefix="/availability", tags=["availability"])


class AvailabilityRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    check_in_date: Any = None
    check_out_date: Any = None
    room_id: Any = None


@router.post("")
def check_availability(body: AvailabilityRequest) -> JSONResponse:
    """Check which rooms can take a booking for [check_in_date, check_out_date).

    An empty result is still a success.
    """
    result = availability.check_availability(
        check_in_date=body.check_in_date,
        check_out_date=body.check_out_date,
        room_id=body.room_id,
    )
    rooms = result["rooms"]
    message = "Available rooms found" if rooms else "No rooms available for selected dates"
    return success(
        rooms,
        message,
        count=len(rooms),
        check_in_date=result["check_in_date"],
        check_out_date=result["check_out_date"],
    )
