"""Correlation ID management for request tracing."""

import uuid
from contextvars import ContextVar, Token

# Accessible from sync route handlers running in the threadpool
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

CORRELATION_ID_HEADER = "X-Correlation-ID"

_MAX_INCOMING_LENGTH = 128


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())


def resolve_correlation_id(incoming: str | None) -> str:
    """Keep a client supplied ID when it is usable, otherwise generate one."""
    if incoming:
        incoming = incoming.strip()
        if incoming and len(incoming) <= _MAX_INCOMING_LENGTH:
            return incoming
    return generate_correlation_id()


def get_correlation_id() -> str:
    """Get current correlation ID from context."""
    return correlation_id_var.get()


def set_correlation_id(cid: str) -> Token[str]:
    """Set correlation ID in context."""
    return correlation_id_var.set(cid)


def reset_correlation_id(token: Token[str]) -> None:
    """Reset correlation ID to previous value."""
    correlation_id_var.reset(token)
