"""Room catalog read path and room serialization."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from psycopg2.extensions import connection as PgConnection

from hotelres.infra.db import txn
from hotelres.infra.repositories.rooms_repository import list_rooms as fetch_rooms

FEATURE_DELIMITER = ","


def decode_features(value: Any) -> list[str]:
    """Turn a stored feature value into a list of feature names.

    The column is TEXT[] (psycopg2 gives a list). Rows imported from the
    legacy schema may still hold a comma-delimited string.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(FEATURE_DELIMITER)
    else:
        items = list(value)
    return [item.strip() for item in items if item and item.strip()]


def encode_features(features: list[str]) -> list[str]:
    """Normalize a feature list for storage in the TEXT[] column."""
    seen: list[str] = []
    for feature in features:
        name = feature.strip()
        if name and name not in seen:
            seen.append(name)
    return seen


def money(value: Decimal | int | float | None) -> float | None:
    if value is None:
        return None
    return float(value)


def room_to_dict(row: tuple) -> dict:
    """Serialize a room projection (see rooms_repository.ROOM_COLUMNS)."""
    created_at = row[9]
    return {
        "id": int(row[0]),
        "room_name": row[1],
        "room_type": row[2],
        "price_per_night": money(row[3]),
        "description": row[4],
        "image_url": row[5],
        "total_rooms": int(row[6]),
        "max_guests": int(row[7]),
        "features": decode_features(row[8]),
        "created_at": created_at.isoformat() if created_at is not None else None,
    }


def list_rooms(*, conn: PgConnection | None = None) -> list[dict]:
    """Return every room, cheapest first."""
    with txn(conn) as cur:
        rows = fetch_rooms(cur)

    return [room_to_dict(row) for row in rows]
