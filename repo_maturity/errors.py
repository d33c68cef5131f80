"""Exception hierarchy for repo-maturity.

All exceptions inherit from RepoMaturityError so callers have a single catch point.
"""


class RepoMaturityError(Exception):
    """Base exception for all repo-maturity errors."""


class VCSError(RepoMaturityError):
    """Error returned by the hosting API (HTTP or GraphQL level)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(VCSError):
    """The requested repository, path or README does not exist."""

    def __init__(self, message: str):
        super().__init__(message, status_code=404)


class StatsComputingError(VCSError):
    """The hosting API is still computing repository statistics (HTTP 202)."""

    def __init__(self, message: str = "Statistics are still being computed"):
        super().__init__(message, status_code=202)
