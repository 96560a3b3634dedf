"""
Circulation engine.

- LoanLedger: outstanding loans and fine computation
- ReservationQueue: per-item waiting lists
- CirculationDesk: registries and request handling on top of both
"""

from .desk import CirculationDesk
from .ledger import LoanLedger
from .reservations import DEFAULT_CAPACITY, ReservationQueue

__all__ = [
    "DEFAULT_CAPACITY",
    "CirculationDesk",
    "LoanLedger",
    "ReservationQueue",
]
