"""Errors raised by the lending ledger."""

from enum import Enum


class LoanErrorKind(str, Enum):
    """Kind of a failed loan request."""

    NOT_FOUND = "not_found"
    INVALID_COUNT = "invalid_count"


class LendingError(ValueError):
    """Base error for malformed or impossible ledger requests."""

    kind: LoanErrorKind

    def __init__(self, message: str, kind: LoanErrorKind):
        super().__init__(message)
        self.kind = kind


class BookNotFoundError(LendingError):
    """No book with the requested id exists in the catalog."""

    def __init__(self, book_id: int):
        super().__init__(f"Book not found: {book_id}", LoanErrorKind.NOT_FOUND)
        self.book_id = book_id


class InvalidCountError(LendingError):
    """A copy count is negative."""

    def __init__(self, count: int):
        super().__init__(f"Invalid book count: {count}", LoanErrorKind.INVALID_COUNT)
        self.count = count
