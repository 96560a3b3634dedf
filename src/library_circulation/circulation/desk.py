"""
Circulation desk for the library.

The desk is the single entry point for circulation requests. It owns the
item and patron registries, resolves the IDs in each request, and hands the
resolved entities to the loan ledger or the reservation queue:

1. **borrow**: resolve, then ``LoanLedger.issue``
2. **return_item**: resolve, ``LoanLedger.settle``, then notify the next
   patron waiting for the item
3. **reserve**: resolve, then ``ReservationQueue.reserve``

Requests are handled one at a time and each runs to completion. Failures
raise a ``CirculationError`` subclass before any state changes.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from ..exceptions import DuplicateIdError, NotFoundError
from ..models.circulation import LoanRecord, ReturnReceipt
from ..models.item import CatalogItem
from ..models.patron import Patron
from .ledger import LoanLedger
from .reservations import DEFAULT_CAPACITY, ReservationQueue

logger = logging.getLogger(__name__)


class CirculationDesk:
    """
    Orchestrates lending, returns and reservations.

    Args:
        reservation_capacity: Maximum patrons waiting on a single item
        clock: Source of the current time for loans and fines
    """

    def __init__(
        self,
        reservation_capacity: int = DEFAULT_CAPACITY,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._items: dict[int, CatalogItem] = {}
        self._patrons: dict[int, Patron] = {}
        self.ledger = LoanLedger()
        self.reservations = ReservationQueue(capacity=reservation_capacity)
        self.clock = clock

    # ------------------------------------------------------------------
    # Registries
    # ------------------------------------------------------------------

    def add_item(self, item: CatalogItem) -> None:
        """
        Register an item in the catalog.

        Raises:
            DuplicateIdError: If the ID is taken; the new item is discarded
        """
        if item.id in self._items:
            logger.warning("Item %s already registered, discarding duplicate", item.id)
            raise DuplicateIdError(f"Item ID {item.id} already exists")
        self._items[item.id] = item
        logger.info("Item %s added: %s", item.id, item.title)

    def add_patron(self, patron: Patron) -> None:
        """
        Register a patron.

        Raises:
            DuplicateIdError: If the ID is taken; the new patron is discarded
        """
        if patron.id in self._patrons:
            logger.warning("Patron %s already registered, discarding duplicate", patron.id)
            raise DuplicateIdError(f"Patron ID {patron.id} already exists")
        self._patrons[patron.id] = patron
        logger.info("Patron %s added: %s", patron.id, patron.username)

    def get_item(self, item_id: int) -> CatalogItem:
        item = self._items.get(item_id)
        if item is None:
            raise NotFoundError(f"Item {item_id} not found")
        return item

    def get_patron(self, patron_id: int) -> Patron:
        patron = self._patrons.get(patron_id)
        if patron is None:
            raise NotFoundError(f"Patron {patron_id} not found")
        return patron

    def items(self) -> list[CatalogItem]:
        """All catalog items, ordered by ID."""
        return [self._items[item_id] for item_id in sorted(self._items)]

    def patrons(self) -> list[Patron]:
        """All patrons, ordered by ID."""
        return [self._patrons[patron_id] for patron_id in sorted(self._patrons)]

    def authenticate(self, patron_id: int, credential: str) -> Patron | None:
        """Return the patron if the credential matches, else None."""
        patron = self._patrons.get(patron_id)
        if patron is None or not patron.authenticate(credential):
            logger.info("Authentication failed for patron %s", patron_id)
            return None
        logger.info("Patron %s logged in", patron_id)
        return patron

    def _resolve(self, patron_id: int, item_id: int) -> tuple[Patron, CatalogItem]:
        return self.get_patron(patron_id), self.get_item(item_id)

    # ------------------------------------------------------------------
    # Circulation requests
    # ------------------------------------------------------------------

    def borrow(self, patron_id: int, item_id: int) -> LoanRecord:
        """
        Lend an item to a patron.

        Raises:
            NotFoundError: If the patron or item is unknown
            NotBorrowableError, ItemUnavailableError, BorrowLimitExceededError:
                If the ledger refuses the loan
        """
        patron, item = self._resolve(patron_id, item_id)
        return self.ledger.issue(item, patron, self.clock())

    def return_item(self, patron_id: int, item_id: int) -> ReturnReceipt:
        """
        Take an item back from a patron and notify the next patron waiting.

        Raises:
            NotFoundError: If the patron or item is unknown
            NoActiveLoanError, OwnershipMismatchError: If the ledger refuses
                the return
        """
        patron, item = self._resolve(patron_id, item_id)
        receipt = self.ledger.settle(item, patron, self.clock())

        notified = self.reservations.notify_next(item)
        if notified is None:
            return receipt
        return receipt.model_copy(update={"notified_patron_id": notified})

    def reserve(self, patron_id: int, item_id: int) -> int:
        """
        Queue a patron for an item.

        Returns:
            The patron's 1-based position in the queue

        Raises:
            NotFoundError: If the patron or item is unknown
            DuplicateReservationError, ReservationQueueFullError: If the
                queue refuses the reservation
        """
        patron, item = self._resolve(patron_id, item_id)
        return self.reservations.reserve(item, patron)

    def cancel_reservation(self, patron_id: int, item_id: int) -> None:
        """Withdraw a patron's reservation for an item, if any."""
        patron, item = self._resolve(patron_id, item_id)
        self.reservations.cancel(item, patron)

    def pay_fine(self, patron_id: int, amount: float) -> float:
        """
        Apply a fine payment and return the remaining balance.

        Raises:
            NotFoundError: If the patron is unknown
            ValueError: If the amount is negative
        """
        if amount < 0:
            raise ValueError("Payment amount must not be negative")
        patron = self.get_patron(patron_id)
        patron.pay_fine(amount)
        logger.info("Patron %s paid %.2f, balance now %.2f", patron_id, amount, patron.fines)
        return patron.fines
