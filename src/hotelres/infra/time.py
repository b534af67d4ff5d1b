"""Business-date handling."""

import os
from datetime import date, datetime
from zoneinfo import ZoneInfo


def today() -> date:
    """Return the hotel's current calendar date.

    Uses HOTEL_TIMEZONE (IANA name) when set, otherwise the host's local date.
    """
    tz_name = os.environ.get("HOTEL_TIMEZONE")
    if tz_name:
        return datetime.now(ZoneInfo(tz_name)).date()
    return date.today()
