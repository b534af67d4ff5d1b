"""Room catalog endpoint.

GET /rooms → every room, cheapest first.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from hotelres.api.envelope import success
from hotelres.domain import catalog

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.get("")
def list_rooms() -> JSONResponse:
    """List all rooms with features expanded and numeric fields as numbers."""
    rooms = catalog.list_rooms()
    return success(rooms, "Rooms retrieved successfully", count=len(rooms))
