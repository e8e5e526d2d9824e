"""
Acquisition progress observers.

Acquirers report progress through an injected observer instead of
writing to the console. Hooks may be called from worker threads.
"""

import logging
from typing import Optional, Sequence


class AcquisitionObserver:
    """No-op observer; subclass and override the hooks you need."""

    def patterns_resolved(self, patterns: Sequence[str]) -> None:
        pass

    def archive_downloaded(self, size_bytes: int, commit_sha: str) -> None:
        pass

    def file_processed(self, relative_path: str) -> None:
        pass

    def file_skipped(self, relative_path: str, error: Exception) -> None:
        pass

    def acquisition_complete(self, data) -> None:
        pass


class LoggingObserver(AcquisitionObserver):
    """Forwards acquisition events to a logger."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("flatrepo.acquisition")

    def patterns_resolved(self, patterns: Sequence[str]) -> None:
        self.logger.debug(f"Ignored patterns: {', '.join(patterns) or '(none)'}")

    def archive_downloaded(self, size_bytes: int, commit_sha: str) -> None:
        self.logger.info(f"Downloaded {size_bytes / 1024:.1f}KB, commit: {commit_sha}")

    def file_processed(self, relative_path: str) -> None:
        self.logger.debug(f"Processing: {relative_path}")

    def file_skipped(self, relative_path: str, error: Exception) -> None:
        self.logger.warning(f"Can't process {relative_path}: {error}")

    def acquisition_complete(self, data) -> None:
        self.logger.info(f"Acquired {len(data.files)} files ({data.meta.kind})")
