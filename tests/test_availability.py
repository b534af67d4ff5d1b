"""Unit tests for the availability engine.

The database cursor and transaction are mocked so these run without Postgres.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from hotelres.domain.availability import check_availability, overlaps, remaining_capacity
from hotelres.domain.errors import ValidationError
from hotelres.infra.repositories.rooms_repository import list_rooms_with_booked_count

TODAY = date(2024, 1, 1)


def _room_row(room_id=1, name="Deluxe King Suite", price="299.00", total=5, booked=0):
    return (
        room_id,
        name,
        "Suite",
        Decimal(price),
        "Spacious suite",
        "assets/imgs/deluxe.jpg",
        total,
        2,
        ["King Bed", "WiFi"],
        datetime(2024, 1, 1, tzinfo=timezone.utc),
        booked,
    )


# ── overlap predicate ──────────────────────────────────────────────────


class TestOverlaps:
    existing = (date(2024, 1, 10), date(2024, 1, 15))

    def test_adjacent_after_does_not_overlap(self):
        assert not overlaps(*self.existing, date(2024, 1, 15), date(2024, 1, 20))

    def test_adjacent_before_does_not_overlap(self):
        assert not overlaps(*self.existing, date(2024, 1, 5), date(2024, 1, 10))

    def test_contained_overlaps(self):
        assert overlaps(*self.existing, date(2024, 1, 12), date(2024, 1, 14))

    def test_partial_at_start_overlaps(self):
        assert overlaps(*self.existing, date(2024, 1, 5), date(2024, 1, 11))

    def test_partial_at_end_overlaps(self):
        assert overlaps(*self.existing, date(2024, 1, 14), date(2024, 1, 18))

    def test_query_contains_existing_overlaps(self):
        assert overlaps(*self.existing, date(2024, 1, 1), date(2024, 1, 31))

    def test_disjoint(self):
        assert not overlaps(*self.existing, date(2024, 2, 1), date(2024, 2, 3))


class TestRemainingCapacity:
    @pytest.mark.parametrize("total,booked,expected", [(5, 0, 5), (5, 4, 1), (1, 1, 0), (2, 3, 0)])
    def test_clamped_at_zero(self, total, booked, expected):
        assert remaining_capacity(total, booked) == expected


# ── repository query ───────────────────────────────────────────────────


class TestAvailabilityQuery:
    def test_overlap_params_use_strict_inequalities(self):
        cur = MagicMock()
        cur.fetchall.return_value = []

        list_rooms_with_booked_count(cur, check_in=date(2024, 1, 15), check_out=date(2024, 1, 20))

        query, params = cur.execute.call_args[0]
        assert "check_in_date < %s" in query
        assert "check_out_date > %s" in query
        assert "status <> 'cancelled'" in query
        assert "ORDER BY r.price_per_night ASC" in query
        assert params == [date(2024, 1, 20), date(2024, 1, 15)]

    def test_room_filter_added(self):
        cur = MagicMock()
        cur.fetchall.return_value = []

        list_rooms_with_booked_count(
            cur, check_in=date(2024, 1, 15), check_out=date(2024, 1, 20), room_id=4
        )

        query, params = cur.execute.call_args[0]
        assert "r.id = %s" in query
        assert params[-1] == 4


# ── check_availability ─────────────────────────────────────────────────


@pytest.fixture
def engine(fake_txn):
    with patch("hotelres.domain.availability.txn", fake_txn), patch(
        "hotelres.domain.availability.today", return_value=TODAY
    ), patch("hotelres.domain.availability.list_rooms_with_booked_count") as repo:
        repo.return_value = []
        yield repo


class TestCheckAvailability:
    def test_missing_dates(self, engine):
        with pytest.raises(ValidationError) as exc_info:
            check_availability(check_in_date="2024-01-10", check_out_date="")
        assert exc_info.value.field == "check_out_date"
        engine.assert_not_called()

    def test_bad_order(self, engine):
        with pytest.raises(ValidationError) as exc_info:
            check_availability(check_in_date="2024-01-10", check_out_date="2024-01-10")
        assert exc_info.value.field == "date_order"

    def test_past_check_in(self, engine):
        with pytest.raises(ValidationError) as exc_info:
            check_availability(check_in_date="2023-12-31", check_out_date="2024-01-02")
        assert exc_info.value.field == "date_in_past"

    def test_annotates_available_rooms(self, engine):
        engine.return_value = [
            _room_row(room_id=5, name="Modern Twin Room", price="249.00", total=8, booked=3),
            _room_row(room_id=1, price="299.00", total=5, booked=0),
        ]

        result = check_availability(check_in_date="2024-01-10", check_out_date="2024-01-15")

        assert [r["id"] for r in result["rooms"]] == [5, 1]
        assert result["rooms"][0]["available_rooms"] == 5
        assert result["rooms"][1]["available_rooms"] == 5
        assert result["rooms"][0]["price_per_night"] == 249.0
        assert result["check_in_date"] == "2024-01-10"
        assert result["check_out_date"] == "2024-01-15"

    def test_full_rooms_filtered_out(self, engine):
        engine.return_value = [_room_row(total=2, booked=2)]

        result = check_availability(check_in_date="2024-01-10", check_out_date="2024-01-15")

        assert result["rooms"] == []

    def test_room_filter_parsed(self, engine):
        check_availability(check_in_date="2024-01-10", check_out_date="2024-01-15", room_id="3")

        kwargs = engine.call_args.kwargs
        assert kwargs["room_id"] == 3
        assert kwargs["check_in"] == date(2024, 1, 10)
        assert kwargs["check_out"] == date(2024, 1, 15)

    def test_blank_room_filter_means_all(self, engine):
        check_availability(check_in_date="2024-01-10", check_out_date="2024-01-15", room_id="")

        assert engine.call_args.kwargs["room_id"] is None

    def test_malformed_room_filter(self, engine):
        with pytest.raises(ValidationError) as exc_info:
            check_availability(
                check_in_date="2024-01-10", check_out_date="2024-01-15", room_id="suite"
            )
        assert exc_info.value.field == "room_id"
