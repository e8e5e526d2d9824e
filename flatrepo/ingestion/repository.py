"""
Repository data structures.

Source descriptors select how a repository is acquired; file records
and metadata form the frozen result handed to the formatting layer.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple, Union


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LocalSource:
    """A directory on local disk."""

    path: str


@dataclass(frozen=True)
class RemoteSource:
    """A GitHub repository fetched as an archive snapshot."""

    url: str
    ref: Optional[str] = None
    timeout: Optional[float] = None  # seconds


SourceDescriptor = Union[LocalSource, RemoteSource]


@dataclass(frozen=True)
class FileRecord:
    """A single file of an acquired repository."""

    relative_path: str
    content: Union[str, bytes]
    is_binary: bool
    extension: str

    @property
    def size_bytes(self) -> int:
        """Length of the content in bytes (UTF-8 for text)."""
        if isinstance(self.content, bytes):
            return len(self.content)
        return len(self.content.encode("utf-8"))

    @property
    def is_decoded(self) -> bool:
        """True when the content is text."""
        return isinstance(self.content, str)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization (content omitted)."""
        return {
            "path": self.relative_path,
            "is_binary": self.is_binary,
            "extension": self.extension,
            "size_bytes": self.size_bytes,
        }


@dataclass(frozen=True)
class LocalMeta:
    """Metadata of a local acquisition."""

    path: str
    fetched_at: datetime = field(default_factory=_utcnow)

    @property
    def kind(self) -> str:
        return "local"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "kind": self.kind,
            "path": self.path,
            "fetched_at": self.fetched_at.isoformat(),
        }


@dataclass(frozen=True)
class RemoteMeta:
    """Metadata of a remote archive acquisition."""

    owner: str
    repo: str
    ref: str
    commit_sha: str
    commit_sha_resolved: bool = True
    fetched_at: datetime = field(default_factory=_utcnow)

    @property
    def kind(self) -> str:
        return "remote"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "kind": self.kind,
            "owner": self.owner,
            "repo": self.repo,
            "ref": self.ref,
            "commit_sha": self.commit_sha,
            "commit_sha_resolved": self.commit_sha_resolved,
            "fetched_at": self.fetched_at.isoformat(),
        }


RepositoryMeta = Union[LocalMeta, RemoteMeta]


@dataclass(frozen=True)
class RepositoryData:
    """
    Canonical result of an acquisition.

    Owned by the caller once returned; nothing in the library keeps a
    reference to it.
    """

    meta: RepositoryMeta
    files: Tuple[FileRecord, ...] = ()

    def __post_init__(self):
        if not isinstance(self.files, tuple):
            object.__setattr__(self, "files", tuple(self.files))

    def with_files(self, files) -> "RepositoryData":
        """Return a copy holding a different file sequence."""
        return replace(self, files=tuple(files))

    def get_file(self, relative_path: str) -> Optional[FileRecord]:
        """Get a file by its relative path."""
        for record in self.files:
            if record.relative_path == relative_path:
                return record
        return None

    @property
    def paths(self) -> Tuple[str, ...]:
        return tuple(record.relative_path for record in self.files)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "meta": self.meta.to_dict(),
            "files": [record.to_dict() for record in self.files],
        }
