"""
Circulation models for the library circulation desk.

- LoanRecord: an outstanding loan, held by the ledger until the item returns
- ReturnReceipt: what the desk reports back after a successful return
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

SECONDS_PER_DAY = 24 * 60 * 60


class LoanRecord(BaseModel):
    """
    Represents a single outstanding loan.

    The ledger keys these by item ID, so at most one exists per item. The
    record is dropped from the ledger as soon as the return is processed;
    ``returned_at`` is stamped on the copy handed back to the caller.
    """

    item_id: int = Field(..., description="ID of the loaned item")

    patron_id: int = Field(..., description="ID of the borrowing patron")

    borrowed_at: datetime = Field(
        ...,
        description="When the loan was issued",
    )

    returned_at: datetime | None = Field(
        None,
        description="When the item came back; absent while outstanding",
    )

    @model_validator(mode="after")
    def validate_dates(self) -> "LoanRecord":
        """Ensure return date is not before the borrow date."""
        if self.returned_at and self.returned_at < self.borrowed_at:
            raise ValueError("Return date cannot be before borrow date")
        return self

    @property
    def is_outstanding(self) -> bool:
        return self.returned_at is None

    def days_elapsed(self, now: datetime) -> int:
        """Whole days between the borrow time and ``now``, truncated."""
        return int((now - self.borrowed_at).total_seconds() // SECONDS_PER_DAY)

    model_config = ConfigDict(
        validate_assignment=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "item_id": 101,
                "patron_id": 1,
                "borrowed_at": "2024-01-02T10:30:00",
                "returned_at": None,
            }
        },
    )


class ReturnReceipt(BaseModel):
    """Outcome of a processed return."""

    loan: LoanRecord

    days_kept: int = Field(..., description="Whole days the item was out")

    days_late: int = Field(
        default=0,
        description="Days past the patron's loan period",
        ge=0,
    )

    fine: float = Field(
        default=0.0,
        description="Fine assessed on this return",
        ge=0.0,
    )

    notified_patron_id: int | None = Field(
        None,
        description="Next patron in the reservation queue, if any",
    )

    @property
    def was_late(self) -> bool:
        return self.fine > 0
