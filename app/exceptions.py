"""
Domain errors for the booking engine.

Raised from crud/utils code as plain ``ValueError`` subclasses and translated
into HTTP responses by the handler registered in ``app.main``.
"""


class BookingDomainError(ValueError):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SlotAlreadyBookedError(BookingDomainError):
    status_code = 409

    def __init__(self, message: str = "This time slot is already booked"):
        super().__init__(message)


class SlotUnavailableError(BookingDomainError):
    status_code = 409

    def __init__(self, message: str = "The requested time slot is not available"):
        super().__init__(message)


class PastBookingError(BookingDomainError):
    def __init__(self, message: str = "Cannot cancel past bookings"):
        super().__init__(message)


class InvalidStatusTransitionError(BookingDomainError):
    pass


def is_unique_violation(exc) -> bool:
    """
    Check whether an ``IntegrityError`` comes from a unique constraint/index.

    Postgres reports SQLSTATE 23505 through the driver exception; SQLite only
    exposes the message text.
    """
    orig = getattr(exc, "orig", exc)
    if getattr(orig, "pgcode", None) == "23505":
        return True
    return "UNIQUE constraint failed" in str(orig)
