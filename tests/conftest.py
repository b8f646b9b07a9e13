"""Pytest configuration and shared fixtures.

This module provides fixtures for testing booklending, including empty and
seeded ledgers, borrowers and seed files.
"""

import json
import os
from pathlib import Path
from typing import Generator

import pytest

from booklending.config import reset_config
from booklending.ledger import Borrower, LendingLedger
from booklending.seeding import sample_catalog, seed_ledger

CONFIG_ENV_VARS = [
    "BOOKLENDING_LOCK_STRATEGY",
    "BOOKLENDING_DEFAULT_COUNT",
    "BOOKLENDING_LOG_LEVEL",
    "BOOKLENDING_CATALOG_PATH",
]


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_config_env() -> Generator[None, None, None]:
    """Isolate tests from configuration in the environment."""
    saved = {name: os.environ.pop(name) for name in CONFIG_ENV_VARS if name in os.environ}
    reset_config()
    yield
    for name in CONFIG_ENV_VARS:
        os.environ.pop(name, None)
    os.environ.update(saved)
    reset_config()


# ============================================================================
# Ledger Fixtures
# ============================================================================


@pytest.fixture
def ledger() -> LendingLedger:
    """Create an empty ledger."""
    return LendingLedger()


@pytest.fixture
def sample_ledger() -> LendingLedger:
    """Create a ledger seeded with the sample catalog (2, 3, 4, 5 copies)."""
    ledger = LendingLedger()
    seed_ledger(ledger, sample_catalog())
    return ledger


@pytest.fixture
def borrower() -> Borrower:
    """Create a sample borrower."""
    return Borrower(id="20020389", name="Nguyen Dai")


@pytest.fixture
def other_borrower() -> Borrower:
    """Create a second borrower."""
    return Borrower(id="20020390", name="Tran Binh")


# ============================================================================
# Seed File Fixtures
# ============================================================================


@pytest.fixture
def catalog_csv(tmp_path: Path) -> Path:
    """Create a catalog CSV file with three books."""
    path = tmp_path / "catalog.csv"
    path.write_text(
        "Title,Author,Copies\n"
        "Dune,Frank Herbert,2\n"
        "Emma,Jane Austen,3\n"
        "Ulysses,James Joyce,1\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def requests_json(tmp_path: Path) -> Path:
    """Create a loan requests JSON file."""
    path = tmp_path / "requests.json"
    path.write_text(json.dumps({"requests": [
        {"borrower_id": "a", "book_id": 1, "count": 2},
        {"borrower_id": "b", "book_id": 1},
        {"borrower_id": "b", "book_id": 2, "count": 1},
        {"borrower_id": "c", "book_id": 9},
        {"borrower_id": "c", "book_id": 3, "count": -1},
    ]}), encoding="utf-8")
    return path
