"""
Repository acquisition for local directories and remote archives.

Handles ignore-rule resolution, directory walking, archive download
and extraction into a uniform collection of file records.
"""

from flatrepo.ingestion.repository import (
    FileRecord,
    LocalMeta,
    LocalSource,
    RemoteMeta,
    RemoteSource,
    RepositoryData,
)
from flatrepo.ingestion.patterns import IgnorePattern, PatternSet, matches
from flatrepo.ingestion.ignore import IgnoreRuleResolver
from flatrepo.ingestion.observer import AcquisitionObserver, LoggingObserver
from flatrepo.ingestion.local import LocalAcquirer
from flatrepo.ingestion.remote import RemoteAcquirer

__all__ = [
    "FileRecord",
    "LocalMeta",
    "LocalSource",
    "RemoteMeta",
    "RemoteSource",
    "RepositoryData",
    "IgnorePattern",
    "PatternSet",
    "matches",
    "IgnoreRuleResolver",
    "AcquisitionObserver",
    "LoggingObserver",
    "LocalAcquirer",
    "RemoteAcquirer",
]
