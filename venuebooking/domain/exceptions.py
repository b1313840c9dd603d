"""
Domain-specific exception hierarchy for the venue booking engine.

Business-rule violations are never raised; they are returned as data in a
``ValidationResult``. The exceptions below signal caller bugs or write-time
failures only.
"""


class VenueBookingError(Exception):
    """Base class for all application-level errors."""


class PreconditionViolation(VenueBookingError, ValueError):
    """Raised when a caller passes malformed input (a programming error)."""


class BookingRejected(VenueBookingError):
    """Raised when a booking creation request fails one or more business rules."""

    def __init__(self, result):
        self.result = result
        messages = "; ".join(error.message for error in result.errors)
        super().__init__(f"Booking validation failed: {messages}")


class BookingConflictError(VenueBookingError):
    """Raised when the booking store refuses a write that would double-book the venue."""

    def __init__(self, booking_id: str, message: str | None = None):
        self.booking_id = booking_id
        super().__init__(message or f"Dates collide with existing booking {booking_id}")
