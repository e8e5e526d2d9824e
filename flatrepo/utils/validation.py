"""
Input validation utilities.

Turns caller input into source descriptors.
"""

import os
from pathlib import Path
from typing import Optional, Tuple

from flatrepo.ingestion.github import GitHubArchiveClient
from flatrepo.ingestion.repository import LocalSource, RemoteSource


def validate_path(path: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a local filesystem path.

    Args:
        path: Path to validate.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not path:
        return False, "Path cannot be empty"

    try:
        path_obj = Path(path).resolve()
    except (OSError, RuntimeError) as e:
        return False, f"Invalid path format: {e}"

    if not path_obj.exists():
        return False, f"Path does not exist: {path}"

    if not path_obj.is_dir():
        return False, f"Path is not a directory: {path}"

    if not os.access(path_obj, os.R_OK):
        return False, f"Path is not readable: {path}"

    return True, None


def validate_url(url: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a GitHub repository URL.

    Args:
        url: URL to validate.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not url:
        return False, "URL cannot be empty"

    url = url.strip()
    if (
        GitHubArchiveClient.GITHUB_HTTPS_PATTERN.match(url)
        or GitHubArchiveClient.GITHUB_SSH_PATTERN.match(url)
    ):
        return True, None

    return False, f"Invalid GitHub URL: {url}"


def looks_like_url(value: str) -> bool:
    return value.startswith(("http://", "https://", "git@"))


def build_source(
    value: str,
    ref: Optional[str] = None,
    timeout: Optional[float] = None,
):
    """
    Build a source descriptor from a path or URL string.

    URLs (``http(s)://`` or ``git@``) become RemoteSource; anything else
    is a LocalSource. Validation of either is left to acquisition.

    Args:
        value: Local path or repository URL.
        ref: Optional ref for remote sources.
        timeout: Optional download timeout in seconds.

    Returns:
        LocalSource or RemoteSource.
    """
    if looks_like_url(value):
        return RemoteSource(url=value, ref=ref, timeout=timeout)
    if ref is not None or timeout is not None:
        raise ValueError("ref and timeout only apply to remote sources")
    return LocalSource(path=value)
