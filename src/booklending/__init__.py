"""Book lending ledger with per-book reservation counts."""

from .ledger import Book, Borrower, LendingLedger

__version__ = "0.1.0"

__all__ = ["Book", "Borrower", "LendingLedger", "__version__"]
