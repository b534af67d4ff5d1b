"""Database URL helpers for Alembic migrations.

The application hands DATABASE_URL straight to psycopg2, which accepts both
URLs and libpq ``key=value`` DSNs. SQLAlchemy only accepts URLs, so
migrations normalise it here. Kept apart from env.py so it can be tested
without an Alembic context.
"""

from __future__ import annotations

import os
import re
from urllib.parse import quote_plus, urlparse, urlunparse

_DRIVER_PREFIX = "postgresql+psycopg2://"

# key=value, where value is either 'quoted (with \' escapes)' or bare
_DSN_TOKEN = re.compile(r"\s*(\w+)\s*=\s*(?:'((?:\\.|[^'\\])*)'|(\S*))")


def _parse_libpq_dsn(dsn: str) -> dict[str, str]:
    """Parse a libpq key=value DSN, handling single-quoted values."""
    tokens: dict[str, str] = {}
    for match in _DSN_TOKEN.finditer(dsn):
        key, quoted, bare = match.groups()
        if quoted is not None:
            tokens[key] = re.sub(r"\\(.)", r"\1", quoted)
        else:
            tokens[key] = bare
    return tokens


def _libpq_dsn_to_url(dsn: str) -> str:
    """Convert a libpq key=value DSN to a SQLAlchemy URL.

    A host starting with "/" is a unix socket directory and goes into the
    query string; anything else becomes HOST:PORT.
    """
    tokens = _parse_libpq_dsn(dsn)

    password = tokens.get("password") or os.environ.get("DB_PASSWORD", "")

    user = quote_plus(tokens.get("user", ""))
    password = quote_plus(password)
    dbname = quote_plus(tokens.get("dbname", ""))
    host = tokens.get("host", "localhost")
    port = tokens.get("port", "5432")

    credentials = f"{user}:{password}@" if user or password else ""

    if host.startswith("/"):
        return f"{_DRIVER_PREFIX}{credentials}/{dbname}?host={quote_plus(host)}"

    return f"{_DRIVER_PREFIX}{credentials}{host}:{port}/{dbname}"


def _with_password(url: str, db_password: str) -> str:
    parsed = urlparse(url)
    if parsed.password or not db_password:
        return url
    netloc = f"{quote_plus(parsed.username or '')}:{quote_plus(db_password)}@{parsed.hostname}"
    if parsed.port:
        netloc += f":{parsed.port}"
    return urlunparse(parsed._replace(netloc=netloc))


def _get_database_url() -> str:
    url = os.environ.get("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is required to run migrations")

    if "://" not in url:
        return _libpq_dsn_to_url(url)

    for scheme in ("postgres://", "postgresql://"):
        if url.startswith(scheme):
            url = _DRIVER_PREFIX + url[len(scheme):]
            break

    return _with_password(url, os.environ.get("DB_PASSWORD", ""))
