"""
Tests for the Patron model.

These tests verify that the Patron model correctly:
1. Applies tier-specific loan limits and loan periods
2. Enforces the borrowing limit and fine ceiling
3. Handles fines and payments
4. Authenticates against the stored credential
"""

import pytest
from pydantic import ValidationError

from library_circulation.models.patron import (
    FINE_CEILING,
    TIER_POLICIES,
    Patron,
    PatronTier,
)


class TestPatronModel:
    """Test suite for the Patron model."""

    def test_create_standard_patron(self, alice):
        """Standard patrons get 5 loans of 14 days."""
        assert alice.tier == PatronTier.STANDARD
        assert alice.max_loans == 5
        assert alice.loan_days == 14
        assert alice.active_loans == 0
        assert alice.fines == 0.0
        assert alice.can_borrow() is True

    def test_create_extended_patron(self, librarian):
        """Extended patrons get an effectively unbounded limit and 365 days."""
        assert librarian.max_loans == TIER_POLICIES[PatronTier.EXTENDED].max_loans
        assert librarian.max_loans >= 1000
        assert librarian.loan_days == 365
        assert librarian.policy.label == "Librarian"

    def test_credential_hidden_from_repr(self, alice):
        assert "wonderland" not in repr(alice)
        assert "wonderland" not in str(alice)

    def test_tier_is_frozen(self, alice):
        with pytest.raises(ValidationError):
            alice.tier = PatronTier.EXTENDED

    def test_negative_counters_rejected(self):
        with pytest.raises(ValidationError):
            Patron(id=1, username="x", credential="y", active_loans=-1)
        with pytest.raises(ValidationError):
            Patron(id=1, username="x", credential="y", fines=-0.5)


class TestAuthentication:
    """Plaintext credential matching."""

    def test_correct_credential(self, alice):
        assert alice.authenticate("wonderland") is True

    def test_wrong_credential(self, alice):
        assert alice.authenticate("looking-glass") is False
        assert alice.authenticate("") is False


class TestBorrowingLimits:
    """can_borrow / record_borrow / record_return."""

    def test_limit_reached(self, alice):
        for _ in range(alice.max_loans):
            assert alice.can_borrow() is True
            alice.record_borrow()
        assert alice.active_loans == 5
        assert alice.can_borrow() is False

    def test_record_borrow_never_rejects(self, alice):
        """The caller is responsible for checking can_borrow first."""
        for _ in range(alice.max_loans + 2):
            alice.record_borrow()
        assert alice.active_loans == 7

    def test_record_return_floors_at_zero(self, alice):
        alice.record_return()
        assert alice.active_loans == 0

        alice.record_borrow()
        alice.record_return()
        alice.record_return()
        assert alice.active_loans == 0

    def test_fine_ceiling_blocks_borrowing(self, alice):
        alice.add_fine(FINE_CEILING - 10.0)
        assert alice.can_borrow() is True

        alice.add_fine(10.0)
        assert alice.fines == FINE_CEILING
        assert alice.can_borrow() is False

    def test_extended_patron_still_subject_to_fines(self, librarian):
        librarian.add_fine(150.0)
        assert librarian.can_borrow() is False


class TestFines:
    """add_fine / pay_fine."""

    def test_add_fine_accumulates(self, alice):
        alice.add_fine(2.5)
        alice.add_fine(3.0)
        assert alice.fines == pytest.approx(5.5)

    def test_add_zero_fine(self, alice):
        alice.add_fine(0.0)
        assert alice.fines == 0.0

    def test_negative_fine_floors_at_zero(self, alice):
        """Negative amounts are not rejected; the balance stays non-negative."""
        alice.add_fine(10.0)
        alice.add_fine(-4.0)
        assert alice.fines == pytest.approx(6.0)

        alice.add_fine(-50.0)
        assert alice.fines == 0.0

    def test_partial_payment(self, alice):
        alice.add_fine(10.0)
        alice.pay_fine(4.0)
        assert alice.fines == pytest.approx(6.0)

    def test_overpayment_clamped_to_zero(self, alice):
        """No credit is kept for overpayment."""
        alice.add_fine(10.0)
        alice.pay_fine(25.0)
        assert alice.fines == 0.0

        alice.add_fine(3.0)
        assert alice.fines == pytest.approx(3.0)

    def test_payment_restores_borrowing(self, alice):
        alice.add_fine(120.0)
        assert alice.can_borrow() is False

        alice.pay_fine(30.0)
        assert alice.can_borrow() is True
