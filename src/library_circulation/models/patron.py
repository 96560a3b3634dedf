"""
Patron model for the library circulation desk.

A patron is a library member who can borrow items. The privilege tier is
fixed when the patron is registered and decides two policy constants through
``TIER_POLICIES``:

- the maximum number of concurrent loans
- the loan period in days, which is also the grace period used when the
  ledger computes late-return fines

Patrons carry a running fine balance. Borrowing is blocked while the balance
is at or above ``FINE_CEILING``.
"""

import secrets
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, SecretStr

# Patrons owing this much or more cannot borrow
FINE_CEILING = 100.0


class PatronTier(str, Enum):
    """Privilege tiers for patrons."""

    STANDARD = "standard"
    EXTENDED = "extended"


class TierPolicy(BaseModel):
    """Borrowing policy fixed by a patron's tier."""

    model_config = ConfigDict(frozen=True)

    max_loans: int = Field(..., ge=1)
    loan_days: int = Field(..., ge=1)
    label: str


TIER_POLICIES: dict[PatronTier, TierPolicy] = {
    PatronTier.STANDARD: TierPolicy(max_loans=5, loan_days=14, label="Regular"),
    # Extended privileges are effectively unbounded
    PatronTier.EXTENDED: TierPolicy(max_loans=1000, loan_days=365, label="Librarian"),
}


class Patron(BaseModel):
    """
    Represents a library patron who can borrow and reserve items.

    The loan counter and fine balance are maintained by the circulation
    ledger; callers check ``can_borrow()`` before ``record_borrow()``.
    """

    id: int = Field(
        ...,
        description="Unique patron identifier",
        frozen=True,
        examples=[1, 42],
    )

    username: str = Field(
        ...,
        description="Login and display name",
        min_length=1,
        max_length=100,
        frozen=True,
        examples=["jsmith", "librarian01"],
    )

    credential: SecretStr = Field(
        ...,
        description="Plaintext password compared on login",
        frozen=True,
        repr=False,
    )

    tier: PatronTier = Field(
        default=PatronTier.STANDARD,
        description="Privilege tier; fixes loan limit and loan period",
        frozen=True,
    )

    active_loans: int = Field(
        default=0,
        description="Number of items currently on loan to the patron",
        ge=0,
    )

    fines: float = Field(
        default=0.0,
        description="Outstanding fine balance",
        ge=0.0,
    )

    @property
    def policy(self) -> TierPolicy:
        return TIER_POLICIES[self.tier]

    @property
    def max_loans(self) -> int:
        return self.policy.max_loans

    @property
    def loan_days(self) -> int:
        """Days an item may be kept before fines start accruing."""
        return self.policy.loan_days

    def authenticate(self, credential: str) -> bool:
        """Check a login attempt against the stored credential."""
        return secrets.compare_digest(
            credential.encode("utf-8"),
            self.credential.get_secret_value().encode("utf-8"),
        )

    def can_borrow(self) -> bool:
        """Check the loan limit and the fine ceiling."""
        return self.active_loans < self.max_loans and self.fines < FINE_CEILING

    def record_borrow(self) -> None:
        """Count a new loan. Does not check ``can_borrow()``."""
        self.active_loans += 1

    def record_return(self) -> None:
        """Count a returned loan; the counter never drops below zero."""
        if self.active_loans > 0:
            self.active_loans -= 1

    def add_fine(self, amount: float) -> None:
        """
        Add a fine to the patron's balance.

        The amount is not checked. A negative amount lowers the balance but
        never below zero.
        """
        self.fines = max(0.0, self.fines + amount)

    def pay_fine(self, amount: float) -> None:
        """
        Record a fine payment.

        Overpayment is discarded: the balance bottoms out at zero and no
        credit is kept.
        """
        self.fines = max(0.0, self.fines - amount)

    model_config = ConfigDict(
        validate_assignment=True,
        populate_by_name=True,
        validate_default=True,
        extra="forbid",
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "username": "jsmith",
                "credential": "hunter2",
                "tier": "standard",
                "active_loans": 2,
                "fines": 0.0,
            }
        },
    )
