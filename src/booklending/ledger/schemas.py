"""Pydantic schemas for the lending ledger."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class LockStrategy(str, Enum):
    """How the ledger serializes loan requests."""

    BOOK = "book"  # One lock per book
    LEDGER = "ledger"  # One lock for the whole ledger


class LoanOutcome(str, Enum):
    """Outcome of a single loan request."""

    GRANTED = "granted"
    DENIED = "denied"
    NOT_FOUND = "not_found"
    INVALID_COUNT = "invalid_count"


class Book(BaseModel):
    """A catalog entry. Immutable once added."""

    id: int = Field(..., ge=1)
    title: str
    author: str
    quantity: int

    model_config = {"frozen": True}


class Borrower(BaseModel):
    """Someone who borrows copies. The ledger only reads the id."""

    id: str = Field(..., min_length=1)
    name: str = ""

    @field_validator("id", "name", mode="before")
    @classmethod
    def strip_text(cls, v):
        """Strip surrounding whitespace from text fields."""
        if isinstance(v, str):
            return v.strip()
        return v

    model_config = {"frozen": True}


class BookCreate(BaseModel):
    """Schema for adding a book to the catalog."""

    title: str = Field(..., min_length=1, max_length=500)
    author: str = Field("", max_length=500)
    quantity: int = Field(1, ge=0)

    @field_validator("title", "author", mode="before")
    @classmethod
    def strip_text(cls, v):
        """Strip surrounding whitespace from text fields."""
        if isinstance(v, str):
            return v.strip()
        return v


class LoanRequest(BaseModel):
    """Schema for a loan request issued against the ledger.

    The count is not range checked here so negative counts reach the
    ledger and surface as ``invalid_count`` outcomes.
    """

    borrower_id: str = Field(..., min_length=1)
    borrower_name: Optional[str] = None
    book_id: int
    count: int = 1

    @field_validator("borrower_id", "borrower_name", mode="before")
    @classmethod
    def strip_text(cls, v):
        """Strip surrounding whitespace from borrower fields."""
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def borrower(self) -> Borrower:
        """Borrower value for this request."""
        return Borrower(id=self.borrower_id, name=self.borrower_name or self.borrower_id)


class LoanResult(BaseModel):
    """Result of replaying one loan request."""

    request: LoanRequest
    outcome: LoanOutcome
    available_after: Optional[int] = None
    message: Optional[str] = None

    @property
    def granted(self) -> bool:
        """Whether the loan was granted."""
        return self.outcome == LoanOutcome.GRANTED

    @property
    def is_error(self) -> bool:
        """Whether the request was malformed or impossible."""
        return self.outcome in (LoanOutcome.NOT_FOUND, LoanOutcome.INVALID_COUNT)


class BookAvailability(BaseModel):
    """Derived availability of one book."""

    book_id: int
    title: str
    author: str
    quantity: int
    reserved: int
    available: int
    borrowers: int


class LedgerSummary(BaseModel):
    """Summary of the whole ledger."""

    total_books: int
    total_copies: int
    total_reserved: int
    total_available: int
    distinct_borrowers: int
    books: list[BookAvailability] = Field(default_factory=list)
