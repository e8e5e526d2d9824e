"""
Remote repository acquisition.

Resolves a GitHub reference, downloads its zip snapshot, extracts the
files and filters them through the default ignore rules.
"""

import logging
from typing import Optional

import requests

from flatrepo.core.config import AcquisitionConfig, Config
from flatrepo.ingestion.archive import iter_archive_entries
from flatrepo.ingestion.file_types import build_record
from flatrepo.ingestion.github import DEFAULT_REF, GitHubArchiveClient
from flatrepo.ingestion.ignore import IgnoreRuleResolver
from flatrepo.ingestion.observer import AcquisitionObserver, LoggingObserver
from flatrepo.ingestion.repository import RemoteMeta, RemoteSource, RepositoryData

logger = logging.getLogger(__name__)


class RemoteAcquirer:
    """
    Acquires a GitHub repository through its archive endpoint.

    Only the built-in default patterns apply; repository ignore files
    are never fetched.
    """

    def __init__(
        self,
        config: AcquisitionConfig = None,
        observer: Optional[AcquisitionObserver] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config or Config.get().acquisition
        self.observer = observer or LoggingObserver()
        self.client = GitHubArchiveClient(self.config, session=session)

    def resolve_ref(self, source: RemoteSource, url_ref: Optional[str]) -> str:
        """Explicit ref, then the ref in the URL, then the default branch."""
        return source.ref or url_ref or DEFAULT_REF

    def acquire(self, source: RemoteSource) -> RepositoryData:
        """
        Download and extract ``source``.

        Args:
            source: Remote source descriptor.

        Returns:
            RepositoryData in archive order.

        Raises:
            InvalidUrlError: If the URL cannot be parsed.
            RepositoryNotFoundError: If the repository or ref is missing.
            TransportError: On other HTTP or network failures.
            FetchTimeoutError: When the download times out.
            CorruptArchiveError: If the archive cannot be decoded.
        """
        reference = self.client.parse_url(source.url)
        ref = self.resolve_ref(source, reference.ref)
        timeout = source.timeout if source.timeout is not None else self.config.request_timeout

        download = self.client.download_archive(
            reference.owner, reference.repo, ref, timeout=timeout
        )

        commit_sha = download.commit_sha
        sha_resolved = commit_sha is not None
        if not sha_resolved:
            logger.warning(
                f"Could not determine commit for {reference.owner}/{reference.repo}, "
                f"using ref {ref!r} instead"
            )
            commit_sha = ref
        self.observer.archive_downloaded(len(download.content), commit_sha)

        ignore = IgnoreRuleResolver(self.config, self.observer).resolve_remote()

        records = []
        for entry in iter_archive_entries(download.content, download.url, ignore):
            records.append(build_record(entry.path, entry.data))
            self.observer.file_processed(entry.path)

        logger.debug(f"Extracted {len(records)} files after filtering")

        meta = RemoteMeta(
            owner=reference.owner,
            repo=reference.repo,
            ref=ref,
            commit_sha=commit_sha,
            commit_sha_resolved=sha_resolved,
        )
        data = RepositoryData(meta=meta, files=records)
        self.observer.acquisition_complete(data)
        return data
