"""Command-line interface for booklending.

Built with Typer for commands and Rich for output. Every command seeds a
fresh in-memory ledger, from a catalog file or the sample catalog.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .config import get_config
from .ledger import Borrower, LendingError, LendingLedger, LedgerSummary, LoanOutcome
from .seeding import (
    CatalogLoadError,
    load_catalog,
    load_requests,
    replay_requests,
    sample_catalog,
    seed_ledger,
)

# Create the main app
app = typer.Typer(
    name="booklending",
    help="Lend books from a catalog with finite copies.",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()
err_console = Console(stderr=True)

CATALOG_OPTION_HELP = "Catalog file (.csv or .json). Defaults to the sample catalog."


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def build_ledger(file: Optional[Path]) -> LendingLedger:
    """Create a ledger seeded from a catalog file or the sample catalog."""
    config = get_config()
    path = file or config.catalog_path

    try:
        books = load_catalog(path) if path else sample_catalog()
    except CatalogLoadError as e:
        print_error(str(e))
        raise typer.Exit(1)

    ledger = LendingLedger(config.lock_strategy)
    seed_ledger(ledger, books)
    return ledger


def format_catalog_table(summary: LedgerSummary, title: str = "Catalog") -> Table:
    """Create a rich table for the catalog with live availability."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Title", style="cyan", no_wrap=False, max_width=40)
    table.add_column("Author", style="green", max_width=25)
    table.add_column("Copies", justify="right")
    table.add_column("Reserved", justify="right")
    table.add_column("Available", justify="right")

    for book in summary.books:
        available = f"[green]{book.available}[/green]" if book.available else "[red]0[/red]"
        table.add_row(
            str(book.book_id),
            book.title,
            book.author,
            str(book.quantity),
            str(book.reserved),
            available,
        )

    return table


def print_summary(summary: LedgerSummary) -> None:
    """Print the ledger totals panel."""
    console.print(Panel(
        f"Books: {summary.total_books}\n"
        f"Copies: {summary.total_copies}\n"
        f"Reserved: {summary.total_reserved}\n"
        f"Available: {summary.total_available}\n"
        f"Borrowers: {summary.distinct_borrowers}",
        title="Ledger Summary",
        style="blue",
    ))


# ============================================================================
# Commands
# ============================================================================


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Lend books from a catalog with finite copies."""
    config = get_config()
    errors = config.validate()
    if errors:
        for error in errors:
            print_error(error)
        raise typer.Exit(1)

    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.command()
def catalog(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=CATALOG_OPTION_HELP),
) -> None:
    """Show the catalog."""
    ledger = build_ledger(file)
    summary = ledger.get_summary()

    if not summary.books:
        console.print("[dim]Catalog is empty[/dim]")
        return

    console.print(format_catalog_table(summary))


@app.command()
def loan(
    borrower: str = typer.Argument(..., help="Borrower ID"),
    book_id: int = typer.Argument(..., help="Book ID to borrow"),
    count: Optional[int] = typer.Option(None, "--count", "-c", help="Copies to borrow"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Borrower display name"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=CATALOG_OPTION_HELP),
) -> None:
    """Request copies of a book for a borrower."""
    ledger = build_ledger(file)
    if count is None:
        count = get_config().default_count
    try:
        person = Borrower(id=borrower, name=name or borrower)
    except ValidationError:
        print_error(f"Invalid borrower ID: {borrower!r}")
        raise typer.Exit(1)

    try:
        granted = ledger.request_loan(person, book_id, count)
    except LendingError as e:
        print_error(f"{e} ({e.kind.value})")
        raise typer.Exit(1)

    book = ledger.get_book(book_id)
    available = ledger.available_copies(book_id)
    if granted:
        print_success(f"Lent {count} of '{book.title}' to {person.name}")
    else:
        print_warning(f"Loan denied: {count} requested, {available} of '{book.title}' available")
    console.print(f"[dim]Available: {available} of {book.quantity}[/dim]")


@app.command()
def replay(
    requests_file: Path = typer.Argument(..., help="Loan requests file (.csv or .json)"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=CATALOG_OPTION_HELP),
) -> None:
    """Replay a file of loan requests against the catalog."""
    ledger = build_ledger(file)

    try:
        requests = load_requests(requests_file)
    except CatalogLoadError as e:
        print_error(str(e))
        raise typer.Exit(1)

    results = replay_requests(ledger, requests)

    table = Table(title="Loan Requests", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Borrower")
    table.add_column("Book", justify="right")
    table.add_column("Count", justify="right")
    table.add_column("Outcome")
    table.add_column("Available", justify="right")

    outcome_styles = {
        LoanOutcome.GRANTED: "[green]granted[/green]",
        LoanOutcome.DENIED: "[yellow]denied[/yellow]",
        LoanOutcome.NOT_FOUND: "[red]not found[/red]",
        LoanOutcome.INVALID_COUNT: "[red]invalid count[/red]",
    }

    for i, result in enumerate(results, start=1):
        table.add_row(
            str(i),
            result.request.borrower_id,
            str(result.request.book_id),
            str(result.request.count),
            outcome_styles[result.outcome],
            str(result.available_after) if result.available_after is not None else "-",
        )

    console.print(table)

    granted = sum(1 for r in results if r.granted)
    errors = sum(1 for r in results if r.is_error)
    console.print(
        f"[dim]{granted} granted, {len(results) - granted - errors} denied, "
        f"{errors} errors[/dim]"
    )
    print_summary(ledger.get_summary())


@app.command()
def summary(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=CATALOG_OPTION_HELP),
) -> None:
    """Show ledger totals."""
    ledger = build_ledger(file)
    print_summary(ledger.get_summary())


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"booklending version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
