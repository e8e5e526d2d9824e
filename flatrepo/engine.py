"""
Main entry points for FlatRepo.

Acquisition and filtering are separate steps so the filtering policy
can be re-applied to the same data without fetching it again.
"""

import logging
from typing import List, Optional

import requests

from flatrepo.core.config import Config, DEFAULT_MAX_BYTES_PER_FILE, FlatrepoConfig
from flatrepo.core.exceptions import (
    BinaryAsTextError,
    EmptyRepositoryError,
    FileTooBigError,
    InvalidEncodingError,
)
from flatrepo.ingestion.ignore import compile_extra_patterns
from flatrepo.ingestion.local import LocalAcquirer
from flatrepo.ingestion.observer import AcquisitionObserver, LoggingObserver
from flatrepo.ingestion.remote import RemoteAcquirer
from flatrepo.ingestion.repository import (
    FileRecord,
    LocalSource,
    RemoteSource,
    RepositoryData,
)

logger = logging.getLogger(__name__)


class RepositoryAggregator:
    """
    High-level interface for acquiring and filtering repositories.

    Holds configuration only; every call builds its own acquirer and
    returns data the aggregator keeps no reference to.
    """

    def __init__(
        self,
        config: FlatrepoConfig = None,
        observer: Optional[AcquisitionObserver] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config or Config.get()
        self.observer = observer or LoggingObserver()
        self.session = session

    def get_repository_data(self, source, output_path=None) -> RepositoryData:
        """
        Acquire the repository described by ``source``.

        Args:
            source: LocalSource or RemoteSource.
            output_path: Output document to leave out of a local acquisition.

        Returns:
            RepositoryData for the source.
        """
        if isinstance(source, LocalSource):
            acquirer = LocalAcquirer(self.config.acquisition, self.observer)
            return acquirer.acquire(source.path, output_path=output_path)
        if isinstance(source, RemoteSource):
            acquirer = RemoteAcquirer(self.config.acquisition, self.observer, self.session)
            return acquirer.acquire(source)
        raise TypeError(f"Unsupported source descriptor: {type(source).__name__}")

    def apply_ignore_and_limits(
        self,
        data: RepositoryData,
        extra_patterns: Optional[str] = None,
        max_bytes_per_file: Optional[int] = None,
        include_binary: Optional[bool] = None,
    ) -> RepositoryData:
        """Filter ``data`` using the processing configuration as defaults."""
        processing = self.config.processing
        return apply_ignore_and_limits(
            data,
            extra_patterns=processing.ignore_patterns if extra_patterns is None else extra_patterns,
            max_bytes_per_file=(
                processing.max_bytes_per_file if max_bytes_per_file is None else max_bytes_per_file
            ),
            include_binary=processing.include_binary if include_binary is None else include_binary,
        )


def get_repository_data(
    source,
    output_path=None,
    config: FlatrepoConfig = None,
    observer: Optional[AcquisitionObserver] = None,
) -> RepositoryData:
    """
    Convenience function to acquire a single repository.

    Args:
        source: LocalSource or RemoteSource.
        output_path: Optional output document to leave out.
        config: Optional configuration.
        observer: Optional progress observer.

    Returns:
        Acquired RepositoryData.
    """
    aggregator = RepositoryAggregator(config, observer)
    return aggregator.get_repository_data(source, output_path=output_path)


def apply_ignore_and_limits(
    data: RepositoryData,
    extra_patterns: str = "",
    max_bytes_per_file: int = DEFAULT_MAX_BYTES_PER_FILE,
    include_binary: bool = False,
) -> RepositoryData:
    """
    Apply caller patterns, the size ceiling and the binary policy.

    Pure transformation: performs no I/O and returns a new
    RepositoryData. Applying it twice with the same arguments gives the
    same result as applying it once.

    Args:
        data: Acquired repository data.
        extra_patterns: Comma-separated ignore patterns.
        max_bytes_per_file: Largest allowed file size in bytes.
        include_binary: Keep binary files instead of dropping them.

    Returns:
        Filtered RepositoryData.

    Raises:
        FileTooBigError: If a remaining file exceeds max_bytes_per_file.
        BinaryAsTextError: If a binary record carries text.
        InvalidEncodingError: If a text record is not valid UTF-8.
        EmptyRepositoryError: If no file remains.
    """
    ignore = compile_extra_patterns(extra_patterns)
    if len(ignore):
        logger.debug(f"Custom ignore patterns: {', '.join(ignore.patterns)}")

    processed: List[FileRecord] = []
    for record in data.files:
        if ignore.matches(record.relative_path):
            continue

        size = record.size_bytes
        if size > max_bytes_per_file:
            raise FileTooBigError(record.relative_path, size, max_bytes_per_file)

        _validate_record(record)

        if record.is_binary and not include_binary:
            continue
        processed.append(record)

    if not processed:
        raise EmptyRepositoryError()

    return data.with_files(processed)


def _validate_record(record: FileRecord) -> None:
    if record.is_binary and record.is_decoded:
        raise BinaryAsTextError(record.relative_path)
    if not record.is_binary and not record.is_decoded:
        try:
            record.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidEncodingError(record.relative_path, cause=e) from e
