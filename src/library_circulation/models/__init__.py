"""
Library circulation models.

Pydantic models for the entities the circulation desk works with:
- CatalogItem: books, textbooks, periodicals and reference works
- Patron: library members with a privilege tier
- LoanRecord / ReturnReceipt: outstanding loans and processed returns
"""

from .circulation import LoanRecord, ReturnReceipt
from .item import ITEM_POLICIES, CatalogItem, ItemKind, ItemPolicy
from .patron import FINE_CEILING, TIER_POLICIES, Patron, PatronTier, TierPolicy

__all__ = [
    "FINE_CEILING",
    "ITEM_POLICIES",
    "TIER_POLICIES",
    "CatalogItem",
    "ItemKind",
    "ItemPolicy",
    "LoanRecord",
    "Patron",
    "PatronTier",
    "ReturnReceipt",
    "TierPolicy",
]
