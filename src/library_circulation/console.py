"""
Interactive console for the library circulation desk.

This is the text front end around ``CirculationDesk``. It collects patrons
and catalog items, logs a patron in, and then runs the circulation menu
until the patron exits. All domain rules live in the desk; this module only
prompts, calls the desk and prints the outcome.

Run it with::

    library-circulation
    python -m library_circulation --log-level INFO
"""

import logging
import sys
from enum import Enum

import typer
from rich.console import Console
from rich.markup import escape
from rich.prompt import FloatPrompt, IntPrompt, Prompt
from rich.table import Table

from .circulation import CirculationDesk
from .config import get_config
from .exceptions import CirculationError
from .models import CatalogItem, ItemKind, Patron, PatronTier

logger = logging.getLogger(__name__)

# Selector values accepted at the "Book Type" prompt
KIND_BY_SELECTOR: dict[int, ItemKind] = {
    0: ItemKind.TEXTBOOK,
    1: ItemKind.PERIODICAL,
    2: ItemKind.REFERENCE,
    3: ItemKind.STANDARD,
}

TIER_BY_SELECTOR: dict[int, PatronTier] = {
    0: PatronTier.STANDARD,
    1: PatronTier.EXTENDED,
}

class LogLevel(str, Enum):
    """Levels accepted by --log-level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


MENU = (
    "\nMenu:\n"
    "1. Show all books\n"
    "2. Borrow book\n"
    "3. Return book\n"
    "4. Reserve book\n"
    "5. Show all users\n"
    "6. Cancel reservation\n"
    "7. Pay fine\n"
    "0. Exit"
)


class ConsoleSession:
    """One interactive session: data entry, login, then the menu loop."""

    def __init__(self, desk: CirculationDesk, console: Console | None = None) -> None:
        self.desk = desk
        self.console = console or Console(highlight=False)

    # --- prompt helpers -------------------------------------------------

    def ask_int(self, label: str, choices: list[str] | None = None) -> int:
        return IntPrompt.ask(label, console=self.console, choices=choices, show_choices=False)

    def ask_text(self, label: str) -> str:
        return Prompt.ask(label, console=self.console)

    def info(self, message: str) -> None:
        self.console.print(escape(message))

    def error(self, message: str) -> None:
        self.console.print(f"[red]Error:[/] {escape(message)}")

    # --- data entry -----------------------------------------------------

    def enter_patrons(self) -> None:
        """Prompt for patrons and register them with the desk."""
        count = self.ask_int("Enter number of users to add")
        for n in range(1, count + 1):
            patron_id = self.ask_int(f"User #{n} ID")
            username = self.ask_text("Username")
            credential = self.ask_text("Password")
            selector = self.ask_int("User Type (0=Regular, 1=Librarian)", choices=["0", "1"])
            try:
                self.desk.add_patron(
                    Patron(
                        id=patron_id,
                        username=username,
                        credential=credential,
                        tier=TIER_BY_SELECTOR[selector],
                    )
                )
            except (CirculationError, ValueError) as e:
                self.error(str(e))
            else:
                self.info("User added.")

    def enter_items(self) -> None:
        """Prompt for catalog items and register them with the desk."""
        count = self.ask_int("Enter number of books to add")
        for n in range(1, count + 1):
            fields: dict[str, object] = {
                "id": self.ask_int(f"Book #{n} ID"),
                "title": self.ask_text("Title"),
                "author": self.ask_text("Author"),
                "category": self.ask_text("Category"),
                "publish_date": self.ask_text("Publish Date"),
                "pages": self.ask_int("Number of pages"),
            }
            kind = KIND_BY_SELECTOR[
                self.ask_int(
                    "Book Type (0=TextBook, 1=Magazine, 2=ReferenceBook, 3=Standard)",
                    choices=[str(s) for s in KIND_BY_SELECTOR],
                )
            ]
            fields["kind"] = kind
            if kind == ItemKind.TEXTBOOK:
                fields["level"] = self.ask_text("Level")
                fields["field"] = self.ask_text("Field")
            elif kind == ItemKind.PERIODICAL:
                fields["issue_number"] = self.ask_int("Issue Number")

            try:
                self.desk.add_item(CatalogItem.model_validate(fields))
            except (CirculationError, ValueError) as e:
                self.error(str(e))
            else:
                self.info("Book added.")

    def login(self) -> Patron | None:
        self.console.print("Login")
        patron_id = self.ask_int("User ID")
        credential = self.ask_text("Password")
        return self.desk.authenticate(patron_id, credential)

    # --- listings -------------------------------------------------------

    def show_items(self) -> None:
        items = self.desk.items()
        if not items:
            self.info("No books in library.")
            return

        table = Table(title="Books", header_style="bold cyan")
        for column in ("ID", "Title", "Author", "Category", "Publish Date", "Pages",
                       "Type", "Status", "Details"):
            table.add_column(column)
        for item in items:
            table.add_row(
                str(item.id),
                escape(item.title),
                escape(item.author),
                escape(item.category),
                escape(item.publish_date),
                str(item.pages),
                item.kind.value,
                item.status_label,
                escape(item.details),
            )
        self.console.print(table)

    def show_patrons(self) -> None:
        table = Table(title="Users", header_style="bold cyan")
        for column in ("ID", "Username", "Type", "Borrowed Books", "Fines"):
            table.add_column(column)
        for patron in self.desk.patrons():
            table.add_row(
                str(patron.id),
                escape(patron.username),
                patron.policy.label,
                str(patron.active_loans),
                f"{patron.fines:.2f}",
            )
        self.console.print(table)

    # --- menu actions ---------------------------------------------------

    def borrow(self, patron: Patron) -> None:
        item_id = self.ask_int("Enter Book ID to borrow")
        self.desk.borrow(patron.id, item_id)
        self.info("Book borrowed successfully.")

    def return_item(self, patron: Patron) -> None:
        item_id = self.ask_int("Enter Book ID to return")
        receipt = self.desk.return_item(patron.id, item_id)
        if receipt.fine > 0:
            self.info(f"Late return fine: {receipt.fine:.2f} ({receipt.days_late} days late)")
        self.info("Book returned successfully.")
        if receipt.notified_patron_id is not None:
            self.info(
                f"Notification: User {receipt.notified_patron_id} "
                f"can now borrow book {receipt.loan.item_id}"
            )

    def reserve(self, patron: Patron) -> None:
        item_id = self.ask_int("Enter Book ID to reserve")
        position = self.desk.reserve(patron.id, item_id)
        self.info(f"Book reserved successfully. Queue position: {position}")

    def cancel_reservation(self, patron: Patron) -> None:
        item_id = self.ask_int("Enter Book ID to cancel reservation")
        self.desk.cancel_reservation(patron.id, item_id)
        self.info("Reservation cancelled if existed.")

    def pay_fine(self, patron: Patron) -> None:
        amount = FloatPrompt.ask("Amount to pay", console=self.console)
        balance = self.desk.pay_fine(patron.id, amount)
        self.info(f"Payment recorded. Outstanding fines: {balance:.2f}")

    def run_menu(self, patron: Patron) -> None:
        """Process menu choices until the patron exits."""
        actions = {
            1: lambda: self.show_items(),
            2: lambda: self.borrow(patron),
            3: lambda: self.return_item(patron),
            4: lambda: self.reserve(patron),
            5: lambda: self.show_patrons(),
            6: lambda: self.cancel_reservation(patron),
            7: lambda: self.pay_fine(patron),
        }
        while True:
            self.console.print(MENU)
            choice = self.ask_int("Choice")
            if choice == 0:
                return
            action = actions.get(choice)
            if action is None:
                self.info("Invalid choice.")
                continue
            try:
                action()
            except (CirculationError, ValueError) as e:
                self.error(str(e))

    def run(self) -> None:
        """Run the whole session; returns when the patron exits or login fails."""
        try:
            self.enter_patrons()
            self.enter_items()

            patron = self.login()
            if patron is None:
                self.info("Authentication failed.")
                return

            self.info(f"Welcome, {patron.username}!")
            self.run_menu(patron)
        except EOFError:
            logger.debug("Input closed, ending session")
        self.info("Goodbye!")


# --- CLI application -----------------------------------------------------

app = typer.Typer(help="Library circulation desk", add_completion=False)


def configure_logging(level: str) -> None:
    """Send log records to stderr so stdout stays clean for the session."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


@app.command()
def main(
    log_level: LogLevel | None = typer.Option(
        None,
        "--log-level",
        "-l",
        case_sensitive=False,
        help="Logging level; overrides configuration",
    ),
) -> None:
    """Enter patrons and books, log in, and run the circulation menu."""
    config = get_config()
    configure_logging(log_level.value if log_level else config.effective_log_level)
    logger.debug("Starting %s", config.banner)

    desk = CirculationDesk(reservation_capacity=config.reservation_capacity)
    try:
        ConsoleSession(desk).run()
    except KeyboardInterrupt:
        logger.info("Session interrupted by user")
