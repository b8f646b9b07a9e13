"""Tests for ledger schemas."""

import pytest
from pydantic import ValidationError

from booklending.ledger import (
    BookCreate,
    Borrower,
    LoanOutcome,
    LoanRequest,
    LoanResult,
)


class TestBookCreate:
    """Tests for BookCreate."""

    def test_defaults(self):
        """Test default author and quantity."""
        data = BookCreate(title="Dune")
        assert data.author == ""
        assert data.quantity == 1

    def test_strips_text(self):
        """Test surrounding whitespace is removed."""
        data = BookCreate(title="  Dune ", author=" Frank Herbert ", quantity=2)
        assert data.title == "Dune"
        assert data.author == "Frank Herbert"

    def test_quantity_from_string(self):
        """Test numeric strings are accepted as quantities."""
        assert BookCreate(title="Dune", quantity="4").quantity == 4

    def test_negative_quantity(self):
        """Test negative quantities are rejected."""
        with pytest.raises(ValidationError):
            BookCreate(title="Dune", quantity=-1)

    def test_blank_title(self):
        """Test blank titles are rejected."""
        with pytest.raises(ValidationError):
            BookCreate(title="   ")


class TestBorrower:
    """Tests for Borrower."""

    def test_empty_id_rejected(self):
        """Test borrowers need an id."""
        with pytest.raises(ValidationError):
            Borrower(id="")

    def test_blank_id_rejected(self):
        """Test whitespace-only ids are rejected."""
        with pytest.raises(ValidationError):
            Borrower(id="   ")

    def test_id_stripped(self):
        """Test surrounding whitespace is removed from the id."""
        assert Borrower(id=" 42 ").id == "42"

    def test_name_optional(self):
        """Test the display name defaults to empty."""
        assert Borrower(id="42").name == ""


class TestLoanRequest:
    """Tests for LoanRequest."""

    def test_default_count(self):
        """Test requests default to one copy."""
        request = LoanRequest(borrower_id="a", book_id=1)
        assert request.count == 1

    def test_negative_count_allowed(self):
        """Test negative counts pass validation for the ledger to reject."""
        request = LoanRequest(borrower_id="a", book_id=1, count=-1)
        assert request.count == -1

    def test_blank_borrower_id_rejected(self):
        """Test whitespace-only borrower ids are rejected."""
        with pytest.raises(ValidationError):
            LoanRequest(borrower_id=" ", book_id=1)

    def test_borrower(self):
        """Test the borrower value built from a request."""
        request = LoanRequest(borrower_id="a", borrower_name="Alice", book_id=1)
        assert request.borrower == Borrower(id="a", name="Alice")

    def test_borrower_name_falls_back_to_id(self):
        """Test the borrower name defaults to the id."""
        request = LoanRequest(borrower_id="a", book_id=1)
        assert request.borrower.name == "a"


class TestLoanResult:
    """Tests for LoanResult."""

    @pytest.mark.parametrize(
        "outcome,granted,is_error",
        [
            (LoanOutcome.GRANTED, True, False),
            (LoanOutcome.DENIED, False, False),
            (LoanOutcome.NOT_FOUND, False, True),
            (LoanOutcome.INVALID_COUNT, False, True),
        ],
    )
    def test_flags(self, outcome, granted, is_error):
        """Test granted and error flags per outcome."""
        result = LoanResult(
            request=LoanRequest(borrower_id="a", book_id=1),
            outcome=outcome,
        )
        assert result.granted is granted
        assert result.is_error is is_error
