"""
Library Circulation Package.

An in-memory catalog and circulation tracker for a single-process console
application: books, patrons, loans, fines and reservation queues.

Key Components:
- models: Pydantic models for items, patrons and loans
- circulation: the loan ledger, reservation queues and circulation desk
- exceptions: failure kinds raised by circulation requests
- config: Configuration management with pydantic-settings
- console: interactive text front end
"""

__version__ = "0.1.0"

from .circulation import CirculationDesk, LoanLedger, ReservationQueue
from .exceptions import CirculationError

__all__ = [
    "CirculationDesk",
    "CirculationError",
    "LoanLedger",
    "ReservationQueue",
    "__version__",
]
