"""Book lending ledger.

Provides functionality for:
- Keeping a catalog of books with finite copy counts
- Granting or denying loan requests against remaining copies
- Per-book and per-borrower reservation totals
"""

from .errors import BookNotFoundError, InvalidCountError, LendingError, LoanErrorKind
from .manager import LendingLedger
from .schemas import (
    Book,
    BookAvailability,
    BookCreate,
    Borrower,
    LedgerSummary,
    LoanOutcome,
    LoanRequest,
    LoanResult,
    LockStrategy,
)

__all__ = [
    "LendingLedger",
    "Book",
    "BookAvailability",
    "BookCreate",
    "Borrower",
    "LedgerSummary",
    "LoanOutcome",
    "LoanRequest",
    "LoanResult",
    "LockStrategy",
    "LendingError",
    "BookNotFoundError",
    "InvalidCountError",
    "LoanErrorKind",
]
