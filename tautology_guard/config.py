"""Configuration management for Tautology Guard.

Loads environment variables (optionally from a .env file) and provides
centralized config access for the CLI. The analyzer itself reads no
configuration.
"""
import os
import re
from dotenv import find_dotenv, load_dotenv

from .discovery import DEFAULT_TEST_FILE_PATTERN

__version__ = "1.0.0"


class Config:
    """Configuration loader with environment variable support."""

    def __init__(self):
        """Initialize config by loading the nearest .env file, if any."""
        env_path = find_dotenv(usecwd=True)
        if env_path:
            load_dotenv(env_path)

        self._validate()

    def _validate(self):
        """Validate environment overrides up front.

        Raises:
            ValueError: If TAUTOLOGY_TEST_PATTERN or TAUTOLOGY_MAX_FILE_BYTES is invalid
        """
        try:
            re.compile(self.test_file_pattern)
        except re.error as e:
            raise ValueError(
                f"TAUTOLOGY_TEST_PATTERN is not a valid regular expression: {e}"
            ) from e

        raw_limit = os.getenv("TAUTOLOGY_MAX_FILE_BYTES", "1000000")
        if not raw_limit.isdigit() or int(raw_limit) <= 0:
            raise ValueError(
                f"TAUTOLOGY_MAX_FILE_BYTES must be a positive integer, got {raw_limit!r}"
            )

    @property
    def base_ref(self) -> str:
        """Git ref the diff is taken against.

        Returns:
            Ref name, ``main`` unless TAUTOLOGY_BASE_REF is set
        """
        return os.getenv("TAUTOLOGY_BASE_REF", "main")

    @property
    def test_file_pattern(self) -> str:
        """Regex a file name must match to count as a test file."""
        return os.getenv("TAUTOLOGY_TEST_PATTERN", DEFAULT_TEST_FILE_PATTERN)

    @property
    def max_file_bytes(self) -> int:
        """Largest test file (in bytes) that will be analyzed.

        Returns:
            Byte limit from TAUTOLOGY_MAX_FILE_BYTES, default 1,000,000
        """
        return int(os.getenv("TAUTOLOGY_MAX_FILE_BYTES", "1000000"))


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
