"""
FlatRepo - flatten a source tree into one deterministic document.

Acquires the files of a local directory or a remote GitHub repository,
resolves layered ignore rules, and hands a frozen file collection to
the formatting layer.
"""

__version__ = "2.1.1"
__author__ = "FlatRepo"

from flatrepo.engine import (
    RepositoryAggregator,
    apply_ignore_and_limits,
    get_repository_data,
)
from flatrepo.ingestion.repository import (
    FileRecord,
    LocalMeta,
    LocalSource,
    RemoteMeta,
    RemoteSource,
    RepositoryData,
)

__all__ = [
    "RepositoryAggregator",
    "apply_ignore_and_limits",
    "get_repository_data",
    "FileRecord",
    "LocalMeta",
    "LocalSource",
    "RemoteMeta",
    "RemoteSource",
    "RepositoryData",
]
