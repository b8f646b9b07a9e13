"""Lending ledger: catalog plus per-book reservation counts."""

import logging
import threading
from typing import Optional, Union

from .errors import BookNotFoundError, InvalidCountError
from .schemas import (
    Book,
    BookAvailability,
    Borrower,
    LedgerSummary,
    LockStrategy,
)

logger = logging.getLogger(__name__)


class LendingLedger:
    """Tracks a catalog of books and how many copies each borrower holds.

    Availability is never stored. Every loan request derives it from the
    live reservation sum while holding the book's lock, so the sum of all
    counts for a book never exceeds its quantity.
    """

    def __init__(self, lock_strategy: Union[LockStrategy, str] = LockStrategy.BOOK):
        """Initialize an empty ledger.

        Args:
            lock_strategy: ``book`` for one lock per book, ``ledger`` for a
                single lock over everything
        """
        self.lock_strategy = LockStrategy(lock_strategy)
        self._lock = threading.RLock()
        self._books: dict[int, Book] = {}
        self._reservations: dict[int, dict[str, int]] = {}
        self._book_locks: dict[int, threading.Lock] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._books)

    def __contains__(self, book_id: object) -> bool:
        return book_id in self._books

    def _book_lock(self, book_id: int):
        if self.lock_strategy is LockStrategy.LEDGER:
            return self._lock
        return self._book_locks[book_id]

    # -------------------------------------------------------------------------
    # Catalog
    # -------------------------------------------------------------------------

    def add_book(self, title: str, author: str, quantity: int) -> Book:
        """Add a book to the catalog.

        Args:
            title: Book title
            author: Book author
            quantity: Copies owned by the library

        Returns:
            The new book, with the next sequential id

        Raises:
            InvalidCountError: If quantity is negative
        """
        if quantity < 0:
            raise InvalidCountError(quantity)

        with self._lock:
            book = Book(id=self._next_id, title=title, author=author, quantity=quantity)
            self._book_locks[book.id] = threading.Lock()
            self._books[book.id] = book
            self._next_id += 1

        logger.debug("Added book %d %r (%d copies)", book.id, book.title, book.quantity)
        return book

    def get_book(self, book_id: int) -> Optional[Book]:
        """Get a book by id, or None."""
        with self._lock:
            return self._books.get(book_id)

    def list_books(self) -> list[Book]:
        """List all books in id order."""
        with self._lock:
            return list(self._books.values())

    # -------------------------------------------------------------------------
    # Loans
    # -------------------------------------------------------------------------

    def request_loan(
        self,
        borrower: Borrower,
        book_id: int,
        requested_count: int = 1,
    ) -> bool:
        """Request copies of a book for a borrower.

        A request that does not fit the remaining copies is denied and
        returns False; this is not an error. Nothing changes unless the loan
        is granted, and then only the borrower's cell for this book.

        Args:
            borrower: Borrower asking for the copies
            book_id: Book to borrow from
            requested_count: Copies requested

        Returns:
            True if granted, False if denied

        Raises:
            InvalidCountError: If requested_count is negative
            BookNotFoundError: If the book does not exist
        """
        if requested_count < 0:
            raise InvalidCountError(requested_count)

        book = self.get_book(book_id)
        if book is None:
            raise BookNotFoundError(book_id)

        with self._book_lock(book_id):
            already_reserved = self._sum_reserved(book_id)
            if requested_count > book.quantity - already_reserved:
                logger.info(
                    "Denied %d of book %d to %s (%d of %d reserved)",
                    requested_count, book_id, borrower.id,
                    already_reserved, book.quantity,
                )
                return False

            # Zero-copy requests always fit and leave no cell behind
            if requested_count > 0:
                holders = self._holders(book_id)
                holders[borrower.id] = holders.get(borrower.id, 0) + requested_count

        logger.info("Granted %d of book %d to %s", requested_count, book_id, borrower.id)
        return True

    def _holders(self, book_id: int) -> dict[str, int]:
        with self._lock:
            return self._reservations.setdefault(book_id, {})

    def _sum_reserved(self, book_id: int) -> int:
        holders = self._reservations.get(book_id)
        if not holders:
            return 0
        return sum(holders.values())

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def total_reserved(self, book_id: int) -> int:
        """Total copies of a book held across all borrowers.

        Returns 0 for books with no reservations, including unknown ids.
        """
        if book_id not in self._books:
            return 0
        with self._book_lock(book_id):
            return self._sum_reserved(book_id)

    def borrower_total(self, borrower_id: str) -> int:
        """Total copies held by one borrower across all books."""
        with self._lock:
            book_ids = list(self._reservations)

        total = 0
        for book_id in book_ids:
            total += self.borrower_holding(borrower_id, book_id)
        return total

    def borrower_holding(self, borrower_id: str, book_id: int) -> int:
        """Copies of one book held by one borrower."""
        if book_id not in self._books:
            return 0
        with self._book_lock(book_id):
            return self._reservations.get(book_id, {}).get(borrower_id, 0)

    def reservations(self, book_id: int) -> dict[str, int]:
        """Copy of the borrower to count mapping for a book."""
        if book_id not in self._books:
            return {}
        with self._book_lock(book_id):
            return dict(self._reservations.get(book_id, {}))

    def available_copies(self, book_id: int) -> int:
        """Copies of a book still available to lend.

        Raises:
            BookNotFoundError: If the book does not exist
        """
        book = self.get_book(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book.quantity - self.total_reserved(book_id)

    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------

    def get_availability(self, book_id: int) -> BookAvailability:
        """Get derived availability for a book.

        Args:
            book_id: Book ID

        Returns:
            BookAvailability for the book

        Raises:
            BookNotFoundError: If the book does not exist
        """
        book = self.get_book(book_id)
        if book is None:
            raise BookNotFoundError(book_id)

        holders = self.reservations(book_id)
        reserved = sum(holders.values())
        return BookAvailability(
            book_id=book.id,
            title=book.title,
            author=book.author,
            quantity=book.quantity,
            reserved=reserved,
            available=book.quantity - reserved,
            borrowers=len(holders),
        )

    def get_summary(self) -> LedgerSummary:
        """Get a summary of the whole ledger.

        With the ``ledger`` strategy the summary is a consistent snapshot.
        With the ``book`` strategy each book is read under its own lock, so
        totals may mix states from before and after concurrent loans; every
        per-book entry is still internally consistent.
        """
        if self.lock_strategy is LockStrategy.LEDGER:
            with self._lock:
                return self._build_summary()
        return self._build_summary()

    def _build_summary(self) -> LedgerSummary:
        books = []
        borrower_ids: set[str] = set()
        for book in self.list_books():
            with self._book_lock(book.id):
                holders = dict(self._reservations.get(book.id, {}))
            reserved = sum(holders.values())
            books.append(BookAvailability(
                book_id=book.id,
                title=book.title,
                author=book.author,
                quantity=book.quantity,
                reserved=reserved,
                available=book.quantity - reserved,
                borrowers=len(holders),
            ))
            borrower_ids.update(holders)

        return LedgerSummary(
            total_books=len(books),
            total_copies=sum(b.quantity for b in books),
            total_reserved=sum(b.reserved for b in books),
            total_available=sum(b.available for b in books),
            distinct_borrowers=len(borrower_ids),
            books=books,
        )
