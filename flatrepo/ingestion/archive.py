"""
Zip archive extraction for remote snapshots.

GitHub archives wrap the repository in a single synthetic top-level
directory (``<owner>-<repo>-<sha>/``). ``iter_archive_entries`` strips
it and yields the remaining files one at a time.
"""

import io
import zipfile
import zlib
from dataclasses import dataclass
from typing import Iterator, Optional

from flatrepo.core.exceptions import CorruptArchiveError
from flatrepo.ingestion.patterns import PatternSet


# Errors zipfile raises for truncated, malformed or unsupported members
ARCHIVE_READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    OSError,
    RuntimeError,
    NotImplementedError,
    ValueError,
)


@dataclass(frozen=True)
class ArchiveEntry:
    """A file extracted from an archive, relative to the repository root."""

    path: str
    data: bytes


def iter_archive_entries(
    content: bytes,
    url: str = "buffer",
    ignore: Optional[PatternSet] = None,
) -> Iterator[ArchiveEntry]:
    """
    Lazily extract the files of a wrapped zip archive.

    The wrapper name is taken from the first file entry; every later
    entry must live under the same wrapper. The sequence is finite and
    not restartable.

    Args:
        content: Raw zip bytes.
        url: Archive origin, used in error messages.
        ignore: Entries whose relative path matches are skipped without
            being decompressed.

    Yields:
        ArchiveEntry for every non-ignored file below the wrapper directory.

    Raises:
        CorruptArchiveError: On any decode failure or wrapper mismatch.
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(content))
    except ARCHIVE_READ_ERRORS as e:
        raise CorruptArchiveError(url, f"Failed to read ZIP file: {e}", cause=e) from e

    wrapper = None
    with archive:
        for info in archive.infolist():
            if info.is_dir():
                continue

            name = info.filename
            if wrapper is None:
                if "/" not in name:
                    raise CorruptArchiveError(
                        url, f"Entry {name} is not inside a top-level directory"
                    )
                wrapper = name.split("/", 1)[0] + "/"

            if not name.startswith(wrapper):
                raise CorruptArchiveError(
                    url, f"Entry {name} is outside wrapper directory {wrapper}"
                )

            relative = name[len(wrapper):]
            if not relative:
                continue
            if ignore is not None and ignore.matches(relative):
                continue

            try:
                data = archive.read(info)
            except ARCHIVE_READ_ERRORS as e:
                raise CorruptArchiveError(
                    url, f"Failed to read file {name}: {e}", cause=e
                ) from e

            yield ArchiveEntry(path=relative, data=data)
