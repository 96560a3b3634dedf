"""
Loan ledger for the library circulation desk.

The ledger is the authoritative record of outstanding loans. It is keyed by
item ID, which is what guarantees at most one active loan per item:

    Available --issue--> OnLoan --settle--> Available

Every precondition is checked before anything is mutated, so a rejected
``issue`` or ``settle`` leaves the item, the patron and the ledger untouched.

Fines are computed on return as::

    max(0, whole_days(now - borrowed_at) - patron.loan_days) * item.fine_rate_per_day()

The grace period comes from the borrower's tier, not from the item, so the
same item can be kept longer by an extended-tier patron before fines accrue.
"""

import logging
from collections.abc import Iterator
from datetime import datetime

from ..exceptions import (
    BorrowLimitExceededError,
    ItemUnavailableError,
    NoActiveLoanError,
    NotBorrowableError,
    OwnershipMismatchError,
)
from ..models.circulation import SECONDS_PER_DAY, LoanRecord, ReturnReceipt
from ..models.item import CatalogItem
from ..models.patron import FINE_CEILING, Patron

logger = logging.getLogger(__name__)


class LoanLedger:
    """
    Tracks outstanding loans and computes fines on return.

    The ledger never looks entities up; the desk resolves IDs and passes
    the item and patron in.
    """

    def __init__(self) -> None:
        self._loans: dict[int, LoanRecord] = {}

    def __len__(self) -> int:
        return len(self._loans)

    def __iter__(self) -> Iterator[LoanRecord]:
        return iter(list(self._loans.values()))

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._loans

    def is_on_loan(self, item_id: int) -> bool:
        return item_id in self._loans

    def loan_for(self, item_id: int) -> LoanRecord | None:
        """Get the outstanding loan for an item, if any."""
        return self._loans.get(item_id)

    def loans_for_patron(self, patron_id: int) -> list[LoanRecord]:
        """Get all outstanding loans held by a patron."""
        return [loan for loan in self._loans.values() if loan.patron_id == patron_id]

    def issue(self, item: CatalogItem, patron: Patron, now: datetime) -> LoanRecord:
        """
        Lend an item to a patron.

        Args:
            item: The item being borrowed
            patron: The borrowing patron
            now: Borrow timestamp

        Returns:
            The new loan record

        Raises:
            NotBorrowableError: If the item is reference-only
            ItemUnavailableError: If the item is already on loan
            BorrowLimitExceededError: If the patron is at the loan limit
                or owes too much in fines
        """
        if not item.is_borrowable():
            logger.info("Loan refused - item %s is reference-only", item.id)
            raise NotBorrowableError(f"Item {item.id} cannot be borrowed (reference item)")

        if item.id in self._loans or not item.is_available():
            logger.info("Loan refused - item %s is already on loan", item.id)
            raise ItemUnavailableError(f"Item {item.id} is not available")

        if not patron.can_borrow():
            logger.info("Loan refused - patron %s cannot borrow", patron.id)
            if patron.fines >= FINE_CEILING:
                raise BorrowLimitExceededError(
                    f"Patron {patron.id} has outstanding fines of {patron.fines:.2f}"
                )
            raise BorrowLimitExceededError(
                f"Patron {patron.id} has reached the borrowing limit of {patron.max_loans}"
            )

        record = LoanRecord(item_id=item.id, patron_id=patron.id, borrowed_at=now)
        self._loans[item.id] = record
        item.set_availability(False)
        patron.record_borrow()

        logger.info("Item %s lent to patron %s", item.id, patron.id)
        return record

    def settle(self, item: CatalogItem, patron: Patron, now: datetime) -> ReturnReceipt:
        """
        Process the return of an item.

        Args:
            item: The item being returned
            patron: The patron returning it; must be the borrower
            now: Return timestamp

        Returns:
            Receipt with the closed loan, days kept and fine assessed

        Raises:
            NoActiveLoanError: If the item has no outstanding loan
            OwnershipMismatchError: If the loan belongs to another patron
        """
        record = self._loans.get(item.id)
        if record is None:
            logger.info("Return refused - no active loan for item %s", item.id)
            raise NoActiveLoanError(f"No active loan for item {item.id}")

        if record.patron_id != patron.id:
            logger.warning(
                "Return refused - item %s is on loan to patron %s, not %s",
                item.id,
                record.patron_id,
                patron.id,
            )
            raise OwnershipMismatchError(f"Patron {patron.id} did not borrow item {item.id}")

        days_kept = record.days_elapsed(now)
        days_late = max(0, days_kept - patron.loan_days)
        fine = self.calculate_fine(item, patron, record.borrowed_at, now)
        if fine > 0:
            patron.add_fine(fine)
            logger.info("Late return fine of %.2f charged to patron %s", fine, patron.id)

        item.set_availability(True)
        patron.record_return()
        del self._loans[item.id]

        logger.info("Item %s returned by patron %s", item.id, patron.id)
        return ReturnReceipt(
            loan=record.model_copy(update={"returned_at": now}),
            days_kept=days_kept,
            days_late=days_late,
            fine=fine,
        )

    @staticmethod
    def calculate_fine(
        item: CatalogItem, patron: Patron, borrowed_at: datetime, returned_at: datetime
    ) -> float:
        """
        Calculate the late-return fine for a loan.

        Only whole days count; the patron's loan period is subtracted before
        the item's daily rate is applied.
        """
        days_kept = int((returned_at - borrowed_at).total_seconds() // SECONDS_PER_DAY)
        days_late = max(0, days_kept - patron.loan_days)
        return days_late * item.fine_rate_per_day()
