"""
Catalog item model for the library circulation desk.

Every book-like entry in the catalog is a ``CatalogItem``. Items come in a
closed set of kinds, and the kind alone decides two policy constants through
``ITEM_POLICIES``:

- whether the item may be lent out at all
- the per-day fine rate charged on late returns

| Kind        | Borrowable | Fine rate |
|-------------|------------|-----------|
| standard    | yes        | 1.0       |
| textbook    | yes        | 0.5       |
| periodical  | yes        | 0.7       |
| reference   | no         | 0.0       |

Descriptive fields are frozen once the item is created; only the
availability flag changes over an item's lifetime.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ItemKind(str, Enum):
    """Variants of catalog items."""

    STANDARD = "standard"
    TEXTBOOK = "textbook"
    PERIODICAL = "periodical"
    REFERENCE = "reference"


class ItemPolicy(BaseModel):
    """Lending policy fixed by an item's kind."""

    model_config = ConfigDict(frozen=True)

    fine_rate: float = Field(..., ge=0.0)
    borrowable: bool


ITEM_POLICIES: dict[ItemKind, ItemPolicy] = {
    ItemKind.STANDARD: ItemPolicy(fine_rate=1.0, borrowable=True),
    ItemKind.TEXTBOOK: ItemPolicy(fine_rate=0.5, borrowable=True),
    ItemKind.PERIODICAL: ItemPolicy(fine_rate=0.7, borrowable=True),
    ItemKind.REFERENCE: ItemPolicy(fine_rate=0.0, borrowable=False),
}


class CatalogItem(BaseModel):
    """
    Represents a single lendable (or reference-only) entry in the catalog.

    The circulation ledger flips ``available`` when a loan is issued or
    settled. Nothing else about an item changes after construction.
    """

    id: int = Field(
        ...,
        description="Unique catalog identifier",
        frozen=True,
        examples=[101, 2024],
    )

    kind: ItemKind = Field(
        default=ItemKind.STANDARD,
        description="Item variant; fixes the fine rate and borrow eligibility",
        frozen=True,
    )

    title: str = Field(
        ...,
        description="Title of the item",
        min_length=1,
        max_length=500,
        frozen=True,
        examples=["Introduction to Algorithms", "National Geographic"],
    )

    author: str = Field(
        ...,
        description="Author or editor",
        min_length=1,
        max_length=200,
        frozen=True,
    )

    category: str = Field(
        default="General",
        description="Shelving category",
        max_length=100,
        frozen=True,
    )

    publish_date: str = Field(
        default="",
        description="Publication date as printed on the item",
        max_length=50,
        frozen=True,
        examples=["2009-07-31", "March 2021"],
    )

    pages: int = Field(
        default=0,
        description="Number of pages",
        ge=0,
        frozen=True,
    )

    # Textbook metadata
    level: str | None = Field(
        None,
        description="Academic level of a textbook",
        frozen=True,
        examples=["Undergraduate", "Graduate"],
    )

    field: str | None = Field(
        None,
        description="Field of study of a textbook",
        frozen=True,
        examples=["Computer Science", "Physics"],
    )

    # Periodical metadata
    issue_number: int | None = Field(
        None,
        description="Issue number of a periodical",
        ge=0,
        frozen=True,
    )

    available: bool = Field(
        default=True,
        description="Whether the item is on the shelf (not on loan)",
    )

    @model_validator(mode="after")
    def validate_variant_fields(self) -> "CatalogItem":
        """Ensure variant-specific metadata matches the item kind."""
        if self.kind == ItemKind.TEXTBOOK:
            if not self.level or not self.field:
                raise ValueError("Textbooks require both level and field")
        elif self.level is not None or self.field is not None:
            raise ValueError("Only textbooks carry level and field")

        if self.kind == ItemKind.PERIODICAL:
            if self.issue_number is None:
                raise ValueError("Periodicals require an issue number")
        elif self.issue_number is not None:
            raise ValueError("Only periodicals carry an issue number")

        if not ITEM_POLICIES[self.kind].borrowable and not self.available:
            raise ValueError("Reference items cannot be on loan")

        return self

    @property
    def policy(self) -> ItemPolicy:
        return ITEM_POLICIES[self.kind]

    def is_borrowable(self) -> bool:
        """Return False only for reference items."""
        return self.policy.borrowable

    def fine_rate_per_day(self) -> float:
        """Fine charged per day past the borrower's loan period."""
        return self.policy.fine_rate

    def is_available(self) -> bool:
        return self.available

    def set_availability(self, available: bool) -> None:
        """
        Mark the item as on the shelf or on loan.

        Reference items never go on loan, so a request to mark one
        unavailable leaves it available.
        """
        if not available and not self.is_borrowable():
            return
        self.available = available

    @property
    def details(self) -> str:
        """Variant-specific description for listings."""
        if self.kind == ItemKind.TEXTBOOK:
            return f"Level: {self.level} | Field: {self.field}"
        if self.kind == ItemKind.PERIODICAL:
            return f"Issue Number: {self.issue_number}"
        if self.kind == ItemKind.REFERENCE:
            return "Reference - cannot be borrowed"
        return ""

    @property
    def status_label(self) -> str:
        return "Available" if self.available else "Borrowed"

    model_config = ConfigDict(
        # Re-validate on assignment so frozen fields stay frozen
        validate_assignment=True,
        populate_by_name=True,
        validate_default=True,
        extra="forbid",
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "id": 101,
                "kind": "textbook",
                "title": "Introduction to Algorithms",
                "author": "Thomas H. Cormen",
                "category": "Computer Science",
                "publish_date": "2009-07-31",
                "pages": 1312,
                "level": "Undergraduate",
                "field": "Computer Science",
                "available": True,
            }
        },
    )
