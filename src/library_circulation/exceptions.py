"""
Exception hierarchy for circulation operations.

Every rejected request raises a subclass of ``CirculationError``. All checks
run before any state is touched, so catching one of these means the desk,
the ledger and the reservation queues are exactly as they were before the
call. The console adapter catches ``CirculationError``, reports it and
returns to the menu.
"""


class CirculationError(Exception):
    """Base exception for circulation operations."""


class DuplicateIdError(CirculationError):
    """Raised when registering an item or patron under an ID already in use."""


class NotFoundError(CirculationError):
    """Raised when a request references an unknown item or patron."""


class NotBorrowableError(CirculationError):
    """Raised when a loan is requested for a reference-only item."""


class ItemUnavailableError(CirculationError):
    """Raised when the item is already on loan."""


class BorrowLimitExceededError(CirculationError):
    """Raised when the patron is at the loan limit or over the fine ceiling."""


class NoActiveLoanError(CirculationError):
    """Raised when returning an item that has no outstanding loan."""


class OwnershipMismatchError(CirculationError):
    """Raised when a patron returns an item someone else borrowed."""


class ReservationQueueFullError(CirculationError):
    """Raised when an item's reservation queue is at capacity."""


class DuplicateReservationError(CirculationError):
    """Raised when the patron is already waiting for the item."""
