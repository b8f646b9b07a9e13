"""Catalog seeding and loan request replay.

Loads catalog and request files and drives a ledger through its public
operations.
"""

from .loader import CatalogLoadError, detect_columns, load_catalog, load_requests
from .replay import replay_requests, sample_catalog, seed_ledger

__all__ = [
    "CatalogLoadError",
    "detect_columns",
    "load_catalog",
    "load_requests",
    "replay_requests",
    "sample_catalog",
    "seed_ledger",
]
