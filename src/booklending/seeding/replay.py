"""Seed a ledger and replay loan requests against it."""

import logging
from typing import Iterable

from ..ledger.errors import LendingError
from ..ledger.manager import LendingLedger
from ..ledger.schemas import Book, BookCreate, LoanOutcome, LoanRequest, LoanResult

logger = logging.getLogger(__name__)


def sample_catalog() -> list[BookCreate]:
    """Four-book sample catalog with 2, 3, 4 and 5 copies."""
    return [
        BookCreate(title="Book 1", author="Author A", quantity=2),
        BookCreate(title="Book 2", author="Author B", quantity=3),
        BookCreate(title="Book 3", author="Author C", quantity=4),
        BookCreate(title="Book 4", author="Author D", quantity=5),
    ]


def seed_ledger(ledger: LendingLedger, books: Iterable[BookCreate]) -> list[Book]:
    """Add catalog rows to a ledger in order.

    Args:
        ledger: Ledger to seed
        books: Validated catalog rows

    Returns:
        The added books, with their assigned ids
    """
    added = [ledger.add_book(b.title, b.author, b.quantity) for b in books]
    logger.debug("Seeded %d books", len(added))
    return added


def replay_requests(
    ledger: LendingLedger,
    requests: Iterable[LoanRequest],
) -> list[LoanResult]:
    """Issue loan requests in order and record each outcome.

    Ledger errors become ``not_found`` or ``invalid_count`` outcomes
    instead of stopping the replay.

    Args:
        ledger: Seeded ledger
        requests: Loan requests to issue

    Returns:
        One LoanResult per request
    """
    results = []
    for request in requests:
        try:
            granted = ledger.request_loan(request.borrower, request.book_id, request.count)
        except LendingError as e:
            results.append(LoanResult(
                request=request,
                outcome=LoanOutcome(e.kind.value),
                message=str(e),
            ))
            continue

        results.append(LoanResult(
            request=request,
            outcome=LoanOutcome.GRANTED if granted else LoanOutcome.DENIED,
            available_after=ledger.available_copies(request.book_id),
        ))
    return results
