"""Configuration management for booklending.

Loads configuration from environment variables and provides defaults.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .ledger.schemas import LockStrategy

# Load .env file if present
load_dotenv()


@dataclass
class Config:
    """Application configuration."""

    # Ledger
    lock_strategy: str
    default_count: int

    # Logging
    log_level: str

    # Seeding
    catalog_path: Optional[Path]

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        catalog_path_str = os.environ.get("BOOKLENDING_CATALOG_PATH")
        catalog_path = Path(catalog_path_str).expanduser() if catalog_path_str else None

        return cls(
            lock_strategy=os.environ.get("BOOKLENDING_LOCK_STRATEGY", "book").lower(),
            default_count=int(os.environ.get("BOOKLENDING_DEFAULT_COUNT", "1")),
            log_level=os.environ.get("BOOKLENDING_LOG_LEVEL", "WARNING").upper(),
            catalog_path=catalog_path,
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        valid_strategies = [s.value for s in LockStrategy]
        if self.lock_strategy not in valid_strategies:
            errors.append(
                f"Invalid lock strategy: {self.lock_strategy} "
                f"(expected one of: {', '.join(valid_strategies)})"
            )

        if self.default_count < 0:
            errors.append(f"Default count must not be negative: {self.default_count}")

        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"Unknown log level: {self.log_level}")

        if self.catalog_path is not None and not self.catalog_path.exists():
            errors.append(f"Catalog file not found: {self.catalog_path}")

        return errors


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
