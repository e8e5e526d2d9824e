"""
GitHub archive handler for remote acquisition.

Parses repository references and downloads zip snapshots from the
GitHub archive endpoint.
"""

import io
import logging
import re
import time
from dataclasses import dataclass
from typing import Mapping, Optional

import requests
from urllib3.exceptions import ReadTimeoutError

from flatrepo.core.config import AcquisitionConfig
from flatrepo.core.exceptions import (
    FetchTimeoutError,
    InvalidUrlError,
    RepositoryNotFoundError,
    TransportError,
)

logger = logging.getLogger(__name__)

DEFAULT_REF = "HEAD"


@dataclass(frozen=True)
class RepositoryReference:
    """Owner, repository name and optional ref parsed from a URL."""

    owner: str
    repo: str
    ref: Optional[str] = None


@dataclass(frozen=True)
class ArchiveDownload:
    """A downloaded archive and the commit it was resolved to."""

    url: str
    content: bytes
    commit_sha: Optional[str]


class GitHubArchiveClient:
    """
    Downloads repository snapshots from GitHub.

    Supports HTTPS URLs (optionally ending in ``/tree/<ref>`` or
    ``/blob/<ref>``) and SSH shorthand.
    """

    GITHUB_HTTPS_PATTERN = re.compile(
        r"^https?://github\.com/([^/]+)/([^/]+?)(?:\.git)?(?:/(?:tree|blob)/([^/]+)(?:/.*)?)?/?$"
    )
    GITHUB_SSH_PATTERN = re.compile(
        r"^git@github\.com:([^/]+)/([^/]+?)(?:\.git)?/?$"
    )
    COMMIT_SHA_PATTERN = re.compile(r"filename=.*-([a-f0-9]{7,40})\.zip")

    def __init__(
        self,
        config: AcquisitionConfig,
        session: Optional[requests.Session] = None,
    ):
        self.config = config
        self.session = session or requests.Session()

    def parse_url(self, url: str) -> RepositoryReference:
        """
        Parse a GitHub URL into owner, repository and ref.

        Raises:
            InvalidUrlError: If the URL is not a GitHub repository URL.
        """
        url = url.strip()
        https_match = self.GITHUB_HTTPS_PATTERN.match(url)
        if https_match:
            owner, repo, ref = https_match.groups()
            return RepositoryReference(owner, repo, ref or None)

        ssh_match = self.GITHUB_SSH_PATTERN.match(url)
        if ssh_match:
            owner, repo = ssh_match.groups()
            return RepositoryReference(owner, repo)

        raise InvalidUrlError(url)

    def archive_url(self, owner: str, repo: str, ref: str) -> str:
        base = self.config.api_base_url.rstrip("/")
        return f"{base}/repos/{owner}/{repo}/zipball/{ref}"

    def _headers(self) -> dict:
        headers = {
            "User-Agent": self.config.user_agent,
            "Accept": "application/vnd.github+json",
        }
        if self.config.github_token:
            headers["Authorization"] = f"Bearer {self.config.github_token}"
        return headers

    def download_archive(
        self,
        owner: str,
        repo: str,
        ref: str = DEFAULT_REF,
        timeout: Optional[float] = None,
    ) -> ArchiveDownload:
        """
        Download a zip snapshot of ``owner/repo`` at ``ref``.

        Args:
            owner: Repository owner.
            repo: Repository name.
            ref: Branch, tag or commit.
            timeout: Seconds allowed for the whole download. requests
                applies it to the connection and to each socket read; the
                elapsed time is also checked between chunks so a slow but
                steady stream cannot exceed it.

        Returns:
            ArchiveDownload with the archive bytes.

        Raises:
            RepositoryNotFoundError: On HTTP 404.
            TransportError: On other non-2xx responses or network failures.
            FetchTimeoutError: When the timeout expires.
        """
        url = self.archive_url(owner, repo, ref)
        logger.info(f"Downloading from GitHub: {owner}/{repo}@{ref}")

        started = time.monotonic()
        try:
            with self.session.get(
                url,
                headers=self._headers(),
                timeout=timeout,
                stream=True,
                allow_redirects=True,
            ) as response:
                if response.status_code == 404:
                    raise RepositoryNotFoundError(owner, repo, url)
                if not 200 <= response.status_code < 300:
                    raise TransportError(
                        f"GitHub API error: {response.status_code} {response.reason}",
                        url,
                        status_code=response.status_code,
                    )

                buffer = io.BytesIO()
                for chunk in response.iter_content(chunk_size=self.config.chunk_size):
                    if chunk:
                        buffer.write(chunk)
                    if timeout is not None and time.monotonic() - started > timeout:
                        raise FetchTimeoutError(url, timeout)

                commit_sha = self.extract_commit_sha(response.headers)
        except requests.exceptions.Timeout as e:
            raise FetchTimeoutError(url, timeout, cause=e) from e
        except requests.exceptions.RequestException as e:
            if _is_stream_read_timeout(e):
                raise FetchTimeoutError(url, timeout, cause=e) from e
            raise TransportError(
                f"Failed to download repository: {e}", url, cause=e
            ) from e

        return ArchiveDownload(url=url, content=buffer.getvalue(), commit_sha=commit_sha)

    def extract_commit_sha(self, headers: Mapping[str, str]) -> Optional[str]:
        """Commit hash from the Content-Disposition filename, if present."""
        disposition = headers.get("Content-Disposition") or ""
        match = self.COMMIT_SHA_PATTERN.search(disposition)
        if match:
            return match.group(1)
        return None


def _is_stream_read_timeout(error: requests.exceptions.RequestException) -> bool:
    # iter_content re-raises urllib3 read timeouts as ConnectionError(ReadTimeoutError)
    return bool(error.args) and isinstance(error.args[0], ReadTimeoutError)
