"""
Tests for the circulation models.

These tests verify that loan records correctly:
1. Start out outstanding
2. Count elapsed time in whole days
3. Reject impossible return dates
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from library_circulation.models.circulation import LoanRecord, ReturnReceipt


class TestLoanRecord:
    """Test suite for LoanRecord."""

    def test_create_outstanding_loan(self, t0):
        loan = LoanRecord(item_id=100, patron_id=1, borrowed_at=t0)

        assert loan.item_id == 100
        assert loan.patron_id == 1
        assert loan.returned_at is None
        assert loan.is_outstanding is True

    def test_returned_loan(self, t0):
        loan = LoanRecord(
            item_id=100, patron_id=1, borrowed_at=t0, returned_at=t0 + timedelta(days=3)
        )
        assert loan.is_outstanding is False

    def test_return_before_borrow_rejected(self, t0):
        with pytest.raises(ValidationError) as exc_info:
            LoanRecord(item_id=100, patron_id=1, borrowed_at=t0, returned_at=t0 - timedelta(hours=1))
        assert "before borrow date" in str(exc_info.value)

    @pytest.mark.parametrize(
        ("elapsed", "days"),
        [
            (timedelta(0), 0),
            (timedelta(hours=23, minutes=59), 0),
            (timedelta(days=1), 1),
            (timedelta(days=14, hours=23), 14),
            (timedelta(days=20), 20),
        ],
    )
    def test_days_elapsed_truncates(self, t0, elapsed, days):
        """Partial days do not count."""
        loan = LoanRecord(item_id=100, patron_id=1, borrowed_at=t0)
        assert loan.days_elapsed(t0 + elapsed) == days


class TestReturnReceipt:
    """Test suite for ReturnReceipt."""

    def test_on_time_receipt(self, t0):
        loan = LoanRecord(item_id=100, patron_id=1, borrowed_at=t0, returned_at=t0)
        receipt = ReturnReceipt(loan=loan, days_kept=0)

        assert receipt.fine == 0.0
        assert receipt.days_late == 0
        assert receipt.was_late is False
        assert receipt.notified_patron_id is None

    def test_late_receipt(self, t0):
        loan = LoanRecord(item_id=100, patron_id=1, borrowed_at=t0, returned_at=t0)
        receipt = ReturnReceipt(loan=loan, days_kept=20, days_late=6, fine=6.0)
        assert receipt.was_late is True
