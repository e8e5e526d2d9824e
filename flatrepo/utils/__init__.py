"""
Utility functions and helpers.

Provides logging setup and source validation used across the codebase.
"""

from flatrepo.utils.logging_config import setup_logging
from flatrepo.utils.validation import build_source, validate_path, validate_url

__all__ = [
    "setup_logging",
    "build_source",
    "validate_path",
    "validate_url",
]
