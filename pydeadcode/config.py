"""Configuration management for pydeadcode.

Loads environment variables (optionally from a .env file in the working
directory) and provides centralized config access. CLI flags override these.
"""
import os
from pathlib import Path
from typing import List
from dotenv import load_dotenv

__version__ = "0.1.0"


class Config:
    """Configuration loader with environment variable support."""

    def __init__(self, env_path: Path = None):
        """Initialize config by loading .env file.

        Args:
            env_path: .env file to load (defaults to ./.env). Variables already
                set in the environment take precedence.
        """
        load_dotenv(env_path or Path.cwd() / ".env")

        self._validate()

    def _validate(self):
        """Validate environment values eagerly.

        Raises:
            ValueError: If PYDEADCODE_MIN_CONFIDENCE is not an integer in 0-100
        """
        value = self.min_confidence
        if not 0 <= value <= 100:
            raise ValueError(
                f"PYDEADCODE_MIN_CONFIDENCE must be between 0 and 100, got {value}"
            )

    @property
    def min_confidence(self) -> int:
        """Minimum confidence a finding needs to be reported.

        Raises:
            ValueError: If the variable is not an integer
        """
        raw = os.getenv("PYDEADCODE_MIN_CONFIDENCE", "60")
        try:
            return int(raw)
        except ValueError:
            raise ValueError(
                f"PYDEADCODE_MIN_CONFIDENCE must be an integer, got {raw!r}"
            ) from None

    @property
    def exclude_patterns(self) -> List[str]:
        """Comma-separated glob patterns from PYDEADCODE_EXCLUDE."""
        return split_patterns(os.getenv("PYDEADCODE_EXCLUDE", ""))

    @property
    def log_level(self) -> str:
        return os.getenv("PYDEADCODE_LOG_LEVEL", "WARNING").upper()


def split_patterns(value: str) -> List[str]:
    """Split a comma-separated pattern list, dropping blanks."""
    return [p.strip() for p in value.split(',') if p.strip()]


# Singleton instance
_config = None


def get_config() -> Config:
    """Get or create singleton Config instance.

    Returns:
        Config instance
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config():
    """Drop the cached Config so the environment is read again."""
    global _config
    _config = None
