"""Shared pytest fixtures for hotelres tests."""
import sys
sys.dont_write_bytecode = True

from contextlib import contextmanager  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402


@pytest.fixture(autouse=True)
def _local_business_date(monkeypatch):
    """Keep "today" on the host clock unless a test pins it.

    HOTEL_TIMEZONE leaking in from the shell would shift date-boundary tests.
    """
    monkeypatch.delenv("HOTEL_TIMEZONE", raising=False)


@pytest.fixture
def cur():
    """Mocked psycopg2 cursor."""
    return MagicMock()


@pytest.fixture
def fake_txn(cur):
    """Stand-in for infra.db.txn that yields the mocked cursor."""

    @contextmanager
    def _txn(conn=None):
        yield cur

    return _txn
