"""Test configuration and fixtures for the library circulation desk.

Fixtures provide:
1. A controllable clock so loan and fine timing is deterministic
2. Ready-made catalog items of every kind
3. Patrons of both tiers
4. A desk stocked with all of the above
5. Configuration isolation between tests
"""

from collections.abc import Generator
from datetime import datetime, timedelta

import pytest

from library_circulation.circulation import CirculationDesk
from library_circulation.config import reset_config
from library_circulation.models import CatalogItem, ItemKind, Patron, PatronTier

T0 = datetime(2024, 1, 1, 9, 0, 0)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, days: int = 0, hours: int = 0) -> datetime:
        self.now += timedelta(days=days, hours=hours)
        return self.now


# === Configuration Fixtures ===


@pytest.fixture(autouse=True)
def isolated_config() -> Generator[None, None, None]:
    """Make sure no test sees another test's configuration."""
    reset_config()
    yield
    reset_config()


# === Clock Fixtures ===


@pytest.fixture
def t0() -> datetime:
    return T0


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# === Catalog Fixtures ===


@pytest.fixture
def standard_item() -> CatalogItem:
    return CatalogItem(
        id=100,
        title="Dune",
        author="Frank Herbert",
        category="Science Fiction",
        publish_date="1965",
        pages=412,
    )


@pytest.fixture
def textbook() -> CatalogItem:
    return CatalogItem(
        id=200,
        kind=ItemKind.TEXTBOOK,
        title="Introduction to Algorithms",
        author="Thomas H. Cormen",
        category="Computer Science",
        publish_date="2009",
        pages=1312,
        level="Undergraduate",
        field="Computer Science",
    )


@pytest.fixture
def periodical() -> CatalogItem:
    return CatalogItem(
        id=300,
        kind=ItemKind.PERIODICAL,
        title="National Geographic",
        author="Various",
        category="Magazine",
        publish_date="March 2021",
        pages=120,
        issue_number=42,
    )


@pytest.fixture
def reference_item() -> CatalogItem:
    return CatalogItem(
        id=400,
        kind=ItemKind.REFERENCE,
        title="Oxford English Dictionary",
        author="Oxford University Press",
        category="Reference",
        publish_date="1989",
        pages=21730,
    )


# === Patron Fixtures ===


@pytest.fixture
def alice() -> Patron:
    return Patron(id=1, username="alice", credential="wonderland")


@pytest.fixture
def bob() -> Patron:
    return Patron(id=2, username="bob", credential="builder")


@pytest.fixture
def librarian() -> Patron:
    return Patron(id=9, username="marian", credential="shush", tier=PatronTier.EXTENDED)


# === Desk Fixtures ===


@pytest.fixture
def desk(
    clock: FakeClock,
    standard_item: CatalogItem,
    textbook: CatalogItem,
    periodical: CatalogItem,
    reference_item: CatalogItem,
    alice: Patron,
    bob: Patron,
    librarian: Patron,
) -> CirculationDesk:
    """A desk with one item of every kind and three patrons."""
    desk = CirculationDesk(clock=clock)
    for item in (standard_item, textbook, periodical, reference_item):
        desk.add_item(item)
    for patron in (alice, bob, librarian):
        desk.add_patron(patron)
    return desk
