"""Tests for time utilities."""

from datetime import date, datetime, timezone
from unittest.mock import patch


class TestToday:
    def test_host_date_by_default(self):
        from hotelres.infra.time import today

        assert today() == date.today()

    def test_hotel_timezone(self, monkeypatch):
        from hotelres.infra import time as time_module

        monkeypatch.setenv("HOTEL_TIMEZONE", "Pacific/Kiritimati")
        fixed = datetime(2025, 5, 20, 23, 0, tzinfo=timezone.utc)

        with patch.object(time_module, "datetime") as mock_dt:
            mock_dt.now.side_effect = lambda tz=None: fixed.astimezone(tz)
            # UTC+14: already the 21st in Kiritimati
            assert time_module.today() == date(2025, 5, 21)
