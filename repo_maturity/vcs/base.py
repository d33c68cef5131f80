"""
Base interface for hosting API providers.

The engine consumes a provider only through the coroutines declared here, so
any GitHub-compatible hosting service can be plugged in by subclassing
BaseVCSProvider.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseVCSProvider(ABC):
    """Abstract hosting API client used by the fetchers."""

    @abstractmethod
    def get_platform_name(self) -> str:
        """Return the platform identifier (e.g. 'github')."""

    @abstractmethod
    def validate_credentials(self) -> bool:
        """Return True when the provider has usable credentials."""

    @abstractmethod
    def get_repository_url(self, owner: str, repo: str) -> str:
        """Return the canonical browser URL of a repository."""

    @abstractmethod
    async def get_repo_metadata(self, owner: str, repo: str) -> dict[str, Any]:
        """
        Fetch basic repository metadata.

        Returns:
            Raw metadata including at least ``created_at``, ``pushed_at`` and
            ``license``.

        Raises:
            NotFoundError: If the repository does not exist.
            VCSError: On any other API failure.
        """

    @abstractmethod
    async def get_commit_activity(self, owner: str, repo: str) -> list[dict[str, Any]]:
        """
        Fetch weekly commit totals for the last year, oldest week first.

        Raises:
            StatsComputingError: If the statistics are still being computed.
            VCSError: On any other API failure.
        """

    @abstractmethod
    async def list_contributors(
        self, owner: str, repo: str, per_page: int = 100
    ) -> list[dict[str, Any]]:
        """List contributors as ``{"login", "contributions"}`` dicts."""

    @abstractmethod
    async def query_pr_and_issue_aggregate(
        self,
        owner: str,
        repo: str,
        merged_pr_sample: int = 50,
        commit_sample: int = 100,
    ) -> dict[str, Any]:
        """
        Run the aggregate PR/issue/fork/commit-sample query.

        Returns:
            The raw ``repository`` object of the aggregate query.
        """

    @abstractmethod
    async def path_exists(self, owner: str, repo: str, path: str) -> bool:
        """
        Check whether a file or directory exists on the default branch.

        Returns:
            True if the path exists, False if the API reports it missing.

        Raises:
            VCSError: On any failure other than "not found".
        """

    @abstractmethod
    async def query_security_alert_count(self, owner: str, repo: str) -> int:
        """Count open security alerts. Requires elevated scope."""

    @abstractmethod
    async def get_readme(self, owner: str, repo: str) -> dict[str, Any]:
        """
        Fetch the repository README.

        Returns:
            ``{"content": <decoded text>, "size": <bytes>}``

        Raises:
            NotFoundError: If the repository has no README.
        """

    @abstractmethod
    async def list_releases(
        self, owner: str, repo: str, per_page: int = 100
    ) -> list[dict[str, Any]]:
        """List published releases, newest first."""

    @abstractmethod
    async def get_rate_limit_status(self) -> dict[str, int]:
        """
        Read the remaining API quota.

        Returns:
            ``{"limit", "remaining", "reset"}`` where ``reset`` is a Unix
            timestamp in seconds.
        """
