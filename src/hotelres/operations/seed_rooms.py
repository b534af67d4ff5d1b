"""Seed the room catalog.

Idempotent: rooms are keyed by room_name, existing rows are left untouched.

Usage:
    DATABASE_URL=... python -m hotelres.operations.seed_rooms
"""

from __future__ import annotations

import sys
from decimal import Decimal

from hotelres.domain.catalog import encode_features
from hotelres.infra.db import txn
from hotelres.observability.logging import get_logger

logger = get_logger(__name__)

SEED_ROOMS: list[dict] = [
    {
        "room_name": "Deluxe King Suite",
        "room_type": "Suite",
        "price_per_night": Decimal("299.00"),
        "description": (
            "Spacious suite with king-sized bed, city views, and luxury amenities. "
            "Perfect for couples seeking ultimate comfort."
        ),
        "image_url": "assets/imgs/francesca-saraco-_dS27XGgRyQ-unsplash.jpg",
        "total_rooms": 5,
        "max_guests": 2,
        "features": ["King Bed", "City View", "Mini Bar", "WiFi"],
    },
    {
        "room_name": "Executive Ocean View",
        "room_type": "Deluxe",
        "price_per_night": Decimal("399.00"),
        "description": (
            "Premium ocean-facing room with private balcony, perfect for romantic "
            "getaways and special occasions."
        ),
        "image_url": "assets/imgs/juliana-morales-ramirez-GmW4hfTX0ns-unsplash.jpg",
        "total_rooms": 4,
        "max_guests": 2,
        "features": ["Ocean View", "Balcony", "Jacuzzi", "WiFi"],
    },
    {
        "room_name": "Presidential Suite",
        "room_type": "Suite",
        "price_per_night": Decimal("799.00"),
        "description": (
            "The ultimate luxury experience with separate living area, dining room, "
            "and panoramic city views."
        ),
        "image_url": "assets/imgs/linus-mimietz-p3UWyaujtQo-unsplash.jpg",
        "total_rooms": 1,
        "max_guests": 4,
        "features": ["2 Bedrooms", "Living Room", "Dining Area", "Butler Service"],
    },
    {
        "room_name": "Garden Villa",
        "room_type": "Villa",
        "price_per_night": Decimal("349.00"),
        "description": (
            "Private villa surrounded by lush gardens, featuring an outdoor seating "
            "area and modern amenities."
        ),
        "image_url": "assets/imgs/runnyrem-LfqmND-hym8-unsplash.jpg",
        "total_rooms": 3,
        "max_guests": 3,
        "features": ["Garden Access", "Queen Bed", "Patio", "WiFi"],
    },
    {
        "room_name": "Modern Twin Room",
        "room_type": "Standard",
        "price_per_night": Decimal("249.00"),
        "description": (
            "Contemporary room with twin beds, ideal for friends or business "
            "travelers seeking comfort."
        ),
        "image_url": "assets/imgs/sara-dubler-Koei_7yYtIo-unsplash.jpg",
        "total_rooms": 8,
        "max_guests": 2,
        "features": ["Twin Beds", "Work Desk", "Coffee Maker", "WiFi"],
    },
    {
        "room_name": "Family Penthouse",
        "room_type": "Penthouse",
        "price_per_night": Decimal("599.00"),
        "description": (
            "Spacious penthouse perfect for families, with multiple bedrooms and a "
            "fully equipped kitchenette."
        ),
        "image_url": "assets/imgs/sidath-vimukthi-60S1280_2i8-unsplash.jpg",
        "total_rooms": 2,
        "max_guests": 6,
        "features": ["3 Bedrooms", "Kitchenette", "Living Area", "Terrace"],
    },
]


def seed_rooms(rooms: list[dict] | None = None, *, conn=None) -> int:
    """Insert any missing rooms.

    Returns:
        Number of rooms inserted.
    """
    inserted = 0
    with txn(conn) as cur:
        for room in rooms if rooms is not None else SEED_ROOMS:
            cur.execute(
                """
                INSERT INTO rooms
                    (room_name, room_type, price_per_night, description,
                     image_url, total_rooms, max_guests, features)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                ON CONFLICT (room_name) DO NOTHING
                """,
                (
                    room["room_name"],
                    room["room_type"],
                    room["price_per_night"],
                    room["description"],
                    room["image_url"],
                    room["total_rooms"],
                    room["max_guests"],
                    encode_features(room["features"]),
                ),
            )
            inserted += cur.rowcount

    logger.info("room catalog seeded", extra={"extra_fields": {"inserted": inserted}})
    return inserted


def main() -> int:
    seed_rooms()
    return 0


if __name__ == "__main__":
    sys.exit(main())
