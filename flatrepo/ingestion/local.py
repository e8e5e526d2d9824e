"""
Local directory acquisition.

Walks a directory tree, prunes ignored paths before any file is read,
and reads the remaining files with bounded parallelism.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from flatrepo.core.config import AcquisitionConfig, Config
from flatrepo.core.exceptions import FilesystemError, PathNotFoundError
from flatrepo.ingestion.file_types import build_record
from flatrepo.ingestion.ignore import IgnoreRuleResolver
from flatrepo.ingestion.observer import AcquisitionObserver, LoggingObserver
from flatrepo.ingestion.patterns import PatternSet
from flatrepo.ingestion.repository import FileRecord, LocalMeta, RepositoryData

logger = logging.getLogger(__name__)


class LocalAcquirer:
    """
    Acquires the files of a local directory.

    Per-file read failures are reported to the observer and the file is
    left out; the acquisition itself still succeeds.
    """

    def __init__(
        self,
        config: AcquisitionConfig = None,
        observer: Optional[AcquisitionObserver] = None,
    ):
        self.config = config or Config.get().acquisition
        self.observer = observer or LoggingObserver()

    def acquire(self, root_path, output_path=None) -> RepositoryData:
        """
        Acquire every non-ignored file beneath ``root_path``.

        Args:
            root_path: Directory to acquire.
            output_path: Optional output document to leave out.

        Returns:
            RepositoryData with records sorted by relative path.

        Raises:
            PathNotFoundError: If root_path is missing or not a directory.
            FilesystemError: If the root cannot be enumerated.
        """
        root = Path(root_path)
        if not root.is_dir():
            raise PathNotFoundError(str(root_path))
        root = root.resolve()

        resolver = IgnoreRuleResolver(self.config, self.observer)
        ignore = resolver.resolve_local(root, output_path)

        candidates = list(self._discover_files(root, ignore))
        logger.debug(f"Discovered {len(candidates)} candidate files in {root}")

        records = self._read_files(candidates)
        records.sort(key=lambda record: record.relative_path)

        data = RepositoryData(meta=LocalMeta(path=str(root)), files=records)
        self.observer.acquisition_complete(data)
        return data

    def _discover_files(
        self, root: Path, ignore: PatternSet
    ) -> Iterator[Tuple[Path, str]]:
        """Yield (absolute path, relative path) of every non-ignored file."""

        def on_error(error: OSError) -> None:
            if error.filename is not None and Path(error.filename) == root:
                raise FilesystemError(str(root), error) from error
            relative = _relative_posix(root, error.filename) if error.filename else "?"
            self.observer.file_skipped(relative, error)

        for current, dirs, filenames in os.walk(root, onerror=on_error):
            current_path = Path(current)
            rel_dir = current_path.relative_to(root)

            dirs[:] = sorted(
                d for d in dirs
                if not ignore.matches((rel_dir / d).as_posix() + "/")
            )

            for filename in sorted(filenames):
                relative = (rel_dir / filename).as_posix()
                if ignore.matches(relative):
                    continue
                yield current_path / filename, relative

    def _read_files(self, candidates: List[Tuple[Path, str]]) -> List[FileRecord]:
        workers = max(1, self.config.read_workers)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = executor.map(lambda item: self._read_file(*item), candidates)
            return [record for record in results if record is not None]

    def _read_file(self, path: Path, relative: str) -> Optional[FileRecord]:
        try:
            if not path.is_file():
                return None
            data = path.read_bytes()
        except OSError as e:
            self.observer.file_skipped(relative, e)
            return None

        record = build_record(relative, data)
        self.observer.file_processed(relative)
        return record


def _relative_posix(root: Path, filename) -> str:
    try:
        return Path(filename).relative_to(root).as_posix()
    except ValueError:
        return str(filename)
