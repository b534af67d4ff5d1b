"""Booking error taxonomy.

Every failure surfaced to a client is one of these. The API layer maps each
class to an HTTP status and a failure envelope; ``code`` is the machine
readable reason (field name, resource name or business rule).
"""

from __future__ import annotations


class BookingError(Exception):
    """Base class for all user-facing booking failures."""

    status_code = 400

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


class ValidationError(BookingError):
    """Malformed or missing input. Reported verbatim to the client."""

    status_code = 400

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(field, message)


class NotFoundError(BookingError):
    """Referenced room/reservation does not exist (or ownership check failed)."""

    status_code = 404

    def __init__(self, resource: str, message: str) -> None:
        self.resource = resource
        super().__init__(resource, message)


class ConflictError(BookingError):
    """Business rule violation: no capacity, already cancelled, past check-in."""

    status_code = 409

    def __init__(self, reason: str, message: str) -> None:
        self.reason = reason
        super().__init__(reason, message)


class StorageError(BookingError):
    """Connection or transaction failure. Never exposes internal detail."""

    status_code = 500

    PUBLIC_MESSAGE = "A storage error occurred. Please try again later."

    def __init__(self, message: str = PUBLIC_MESSAGE) -> None:
        super().__init__("storage", message)
