"""Redaction helpers for safe logging. Guest contact data must pass through these."""

import re
from typing import Any

# Patterns that should never appear in logs
_PHONE_PATTERN = re.compile(r"\+?\d[\d\s\-()]{8,}\d")
_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

_REDACTED = "[REDACTED]"

# Keys whose values are guest PII regardless of their shape
_PII_KEYS = frozenset({"full_name", "guest_name", "email", "phone", "special_requests"})


def redact_string(value: str) -> str:
    """Redact PII patterns from a string."""
    result = _PHONE_PATTERN.sub(_REDACTED, value)
    result = _EMAIL_PATTERN.sub(_REDACTED, result)
    return result


def redact_value(value: Any) -> str:
    """Redact any value for safe logging. Returns string representation."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return redact_string(value)
    if isinstance(value, dict):
        # Structure only, never values
        return f"dict(keys={list(value.keys())})"
    if isinstance(value, (list, tuple)):
        return f"list(len={len(value)})"
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return f"<{type(value).__name__}>"


def safe_log_context(**kwargs: Any) -> dict[str, str]:
    """Build a context dict safe for logging.

    Known guest PII keys are dropped to a presence marker; every other value
    is redacted by pattern.
    """
    context: dict[str, str] = {}
    for key, value in kwargs.items():
        if key in _PII_KEYS:
            context[key] = _REDACTED if value else "null"
        else:
            context[key] = redact_value(value)
    return context
