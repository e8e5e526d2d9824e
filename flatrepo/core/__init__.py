"""
Core module containing configuration and the exception hierarchy.
"""

from flatrepo.core.config import (
    Config,
    FlatrepoConfig,
    AcquisitionConfig,
    ProcessingConfig,
)
from flatrepo.core.exceptions import (
    FlatrepoError,
    FetchError,
    ProcessError,
)

__all__ = [
    "Config",
    "FlatrepoConfig",
    "AcquisitionConfig",
    "ProcessingConfig",
    "FlatrepoError",
    "FetchError",
    "ProcessError",
]
