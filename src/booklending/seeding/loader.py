"""Catalog and loan request loading from CSV or JSON files.

Column names are auto-detected from common variations, so exports from
other tools can usually be loaded without a mapping.
"""

import csv
import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from ..ledger.schemas import BookCreate, LoanRequest


class CatalogLoadError(Exception):
    """Seed file could not be read or a row is malformed."""

    pass


# Internal field -> accepted column names (lowercase)
BOOK_FIELDS = {
    "title": ["title", "book title", "name", "book name", "book"],
    "author": ["author", "authors", "writer", "by", "book author"],
    "quantity": ["quantity", "copies", "total copies", "count", "qty", "stock"],
}

REQUEST_FIELDS = {
    "borrower_id": ["borrower_id", "borrower id", "borrower", "user_id", "user", "member_id", "member"],
    "borrower_name": ["borrower_name", "borrower name", "name", "user_name"],
    "book_id": ["book_id", "book id", "book"],
    "count": ["count", "copies", "quantity", "qty"],
}


def detect_columns(columns: list[str], fields: dict[str, list[str]]) -> dict[str, str]:
    """Map internal field names to the matching source column names.

    Args:
        columns: Column names found in the file
        fields: Internal field name to accepted variations

    Returns:
        Internal field name -> source column name, for detected fields only
    """
    columns_lower = {c.strip().lower(): c for c in columns if isinstance(c, str)}
    mapping = {}
    for field_name, variations in fields.items():
        for variation in variations:
            if variation in columns_lower:
                mapping[field_name] = columns_lower[variation]
                break
    return mapping


def _read_rows(file_path: Path, list_key: str) -> list[dict[str, Any]]:
    if not file_path.exists():
        raise CatalogLoadError(f"File not found: {file_path}")

    suffix = file_path.suffix.lower()
    try:
        if suffix == ".csv":
            with open(file_path, "r", encoding="utf-8-sig", newline="") as f:
                return list(csv.DictReader(f))

        if suffix == ".json":
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                data = data.get(list_key)
            if not isinstance(data, list):
                raise CatalogLoadError(
                    f"Expected a list or an object with a '{list_key}' list in {file_path}"
                )
            return data
    except (OSError, UnicodeDecodeError, csv.Error, json.JSONDecodeError) as e:
        raise CatalogLoadError(f"Cannot read {file_path}: {e}") from e

    raise CatalogLoadError(f"Unsupported file type: {file_path.suffix or file_path.name}")


def _parse_rows(
    rows: list[dict[str, Any]],
    fields: dict[str, list[str]],
    schema: type[BaseModel],
    file_path: Path,
) -> list:
    records = []
    for line, row in enumerate(rows, start=1):
        if not isinstance(row, dict):
            raise CatalogLoadError(f"{file_path}: row {line} is not an object")
        if None in row:
            raise CatalogLoadError(f"{file_path}: row {line} has more cells than the header")

        mapping = detect_columns(list(row.keys()), fields)
        values = {}
        for field_name, column in mapping.items():
            value = row[column]
            # Blank CSV cells fall back to schema defaults
            if isinstance(value, str):
                value = value.strip()
                if not value:
                    continue
            values[field_name] = value

        try:
            records.append(schema.model_validate(values))
        except ValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise CatalogLoadError(f"{file_path}: row {line}: {errors}") from e
    return records


def load_catalog(file_path: Path) -> list[BookCreate]:
    """Load catalog rows from a CSV or JSON file.

    Args:
        file_path: Path to a ``.csv`` file or a ``.json`` list (or an object
            with a ``books`` list)

    Returns:
        Validated book rows in file order

    Raises:
        CatalogLoadError: If the file is missing, unreadable or malformed
    """
    file_path = Path(file_path)
    rows = _read_rows(file_path, "books")
    return _parse_rows(rows, BOOK_FIELDS, BookCreate, file_path)


def load_requests(file_path: Path) -> list[LoanRequest]:
    """Load loan requests from a CSV or JSON file.

    Args:
        file_path: Path to a ``.csv`` file or a ``.json`` list (or an object
            with a ``requests`` list)

    Returns:
        Validated loan requests in file order

    Raises:
        CatalogLoadError: If the file is missing, unreadable or malformed
    """
    file_path = Path(file_path)
    rows = _read_rows(file_path, "requests")
    return _parse_rows(rows, REQUEST_FIELDS, LoanRequest, file_path)
