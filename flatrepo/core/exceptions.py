"""
Custom exceptions for FlatRepo.

Two disjoint families: fetch errors raised while acquiring a repository
and process errors raised while filtering and validating the acquired
files. Every error keeps the underlying cause for diagnostics.
"""

from typing import Optional


class FlatrepoError(Exception):
    """Base exception for all FlatRepo errors."""

    def __init__(
        self,
        message: str,
        stage: str = None,
        code: str = None,
        details: dict = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.stage = stage
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self):
        base_msg = super().__str__()
        if self.stage:
            return f"[{self.stage}] {base_msg}"
        return base_msg


class FetchError(FlatrepoError):
    """Raised when a repository cannot be acquired."""

    def __init__(
        self,
        message: str,
        code: str,
        source: dict = None,
        cause: Optional[BaseException] = None,
        details: dict = None,
    ):
        merged = dict(source or {})
        merged.update(details or {})
        super().__init__(message, stage="Fetch", code=code, details=merged, cause=cause)
        self.source = source or {}


class InvalidUrlError(FetchError):
    """Raised when a repository reference cannot be parsed."""

    def __init__(self, url: str, cause: Optional[BaseException] = None):
        super().__init__(
            f"Invalid GitHub URL format: {url}",
            "INVALID_URL",
            source={"url": url},
            cause=cause,
        )


class RepositoryNotFoundError(FetchError):
    """Raised when the repository or the requested ref does not exist."""

    def __init__(self, owner: str, repo: str, url: str):
        super().__init__(
            f"Repository not found or not accessible: {owner}/{repo}",
            "REPOSITORY_NOT_FOUND",
            source={"url": url},
            details={"owner": owner, "repo": repo},
        )


class TransportError(FetchError):
    """Raised on a non-2xx archive response or a network failure."""

    def __init__(
        self,
        message: str,
        url: str,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        code = "GITHUB_API_ERROR" if status_code is not None else "DOWNLOAD_ERROR"
        super().__init__(
            message,
            code,
            source={"url": url},
            cause=cause,
            details={"status_code": status_code},
        )
        self.status_code = status_code


class FetchTimeoutError(FetchError):
    """Raised when the archive download exceeds the configured timeout."""

    def __init__(self, url: str, timeout: float, cause: Optional[BaseException] = None):
        super().__init__(
            f"Timeout after {timeout}s fetching {url}",
            "TIMEOUT",
            source={"url": url},
            cause=cause,
            details={"timeout": timeout},
        )
        self.timeout = timeout


class CorruptArchiveError(FetchError):
    """Raised when a downloaded archive cannot be decoded."""

    def __init__(self, url: str, reason: str, cause: Optional[BaseException] = None):
        super().__init__(
            f"Corrupt or invalid archive from {url}: {reason}",
            "CORRUPT_ARCHIVE",
            source={"url": url},
            cause=cause,
            details={"reason": reason},
        )


class PathNotFoundError(FetchError):
    """Raised when a local root does not exist or is not a directory."""

    def __init__(self, path: str):
        super().__init__(
            f"Path not found: {path}",
            "PATH_NOT_FOUND",
            source={"path": path},
        )


class FilesystemError(FetchError):
    """Raised when a local directory tree cannot be enumerated."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        super().__init__(
            f"Error while finding files in {path}: {cause}",
            "FILESYSTEM_ERROR",
            source={"path": path},
            cause=cause,
        )


class ProcessError(FlatrepoError):
    """Raised when acquired files fail filtering or validation."""

    def __init__(
        self,
        message: str,
        code: str,
        file_path: Optional[str] = None,
        cause: Optional[BaseException] = None,
        details: dict = None,
    ):
        merged = {"file_path": file_path} if file_path else {}
        merged.update(details or {})
        super().__init__(message, stage="Process", code=code, details=merged, cause=cause)
        self.file_path = file_path


class FileTooBigError(ProcessError):
    """Raised when a file exceeds the per-file byte ceiling."""

    def __init__(self, file_path: str, size_bytes: int, max_bytes: int):
        super().__init__(
            f"File {file_path} ({size_bytes} bytes) exceeds maxBytesPerFile limit of {max_bytes}",
            "FILE_TOO_BIG",
            file_path=file_path,
            details={"size_bytes": size_bytes, "max_bytes": max_bytes},
        )
        self.size_bytes = size_bytes
        self.max_bytes = max_bytes


class EmptyRepositoryError(ProcessError):
    """Raised when nothing is left after filtering."""

    def __init__(self):
        super().__init__(
            "Repository contains no processable files",
            "EMPTY_REPOSITORY",
        )


class BinaryAsTextError(ProcessError):
    """Raised when a binary record carries decoded text."""

    def __init__(self, file_path: str):
        super().__init__(
            f"Attempted to process binary file {file_path} as text",
            "BINARY_AS_TEXT",
            file_path=file_path,
        )


class InvalidEncodingError(ProcessError):
    """Raised when a text record is not valid UTF-8."""

    def __init__(self, file_path: str, cause: Optional[BaseException] = None):
        super().__init__(
            f"Invalid text encoding in file {file_path}",
            "INVALID_ENCODING",
            file_path=file_path,
            cause=cause,
        )
