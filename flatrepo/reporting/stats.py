"""
Repository statistics.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Sequence

from flatrepo.ingestion.repository import FileRecord


@dataclass
class RepositoryStats:
    """Aggregate statistics of a processed file collection."""

    total_files: int = 0
    total_lines: int = 0
    total_bytes: int = 0
    binary_files: int = 0
    file_types: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "total_files": self.total_files,
            "total_lines": self.total_lines,
            "total_bytes": self.total_bytes,
            "binary_files": self.binary_files,
            "file_types": dict(self.file_types),
        }


def calculate_stats(
    processed_files: Sequence[FileRecord],
    all_files: Sequence[FileRecord] = None,
) -> RepositoryStats:
    """
    Calculate statistics for the processed files.

    Lines are counted for text files only. ``binary_files`` counts the
    binaries among ``all_files`` (defaults to the processed files), so
    binaries dropped by the binary policy are still reported.
    """
    if all_files is None:
        all_files = processed_files

    stats = RepositoryStats(
        total_files=len(processed_files),
        binary_files=sum(1 for f in all_files if f.is_binary),
    )

    for record in processed_files:
        stats.total_bytes += record.size_bytes
        if record.is_decoded:
            stats.total_lines += len(record.content.split("\n"))
        stats.file_types[record.extension] = stats.file_types.get(record.extension, 0) + 1

    return stats
