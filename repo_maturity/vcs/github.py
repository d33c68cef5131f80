"""
GitHub VCS provider implementation for repo-maturity.

Uses the GitHub REST API for single-resource fetches and file existence checks,
and the GraphQL API for the aggregated PR/issue query and security alerts.
"""

import base64
import os
from typing import Any

import httpx
from dotenv import load_dotenv

from repo_maturity.errors import NotFoundError, StatsComputingError, VCSError
from repo_maturity.http_client import _get_async_http_client
from repo_maturity.vcs.base import BaseVCSProvider

# Load environment variables
load_dotenv()

# GitHub API endpoints
GITHUB_REST_API = "https://api.github.com"
GITHUB_GRAPHQL_API = "https://api.github.com/graphql"

PR_AGGREGATE_QUERY = """
query GetPullRequestAggregate(
  $owner: String!, $name: String!, $mergedSample: Int!, $commitSample: Int!
) {
  repository(owner: $owner, name: $name) {
    isFork
    parent {
      nameWithOwner
    }
    allIssues: issues {
      totalCount
    }
    openIssues: issues(states: OPEN) {
      totalCount
    }
    allPRs: pullRequests {
      totalCount
    }
    mergedPRs: pullRequests(states: MERGED) {
      totalCount
    }
    closedPRs: pullRequests(states: CLOSED) {
      totalCount
    }
    openPRs: pullRequests(states: OPEN) {
      totalCount
    }
    recentMergedPRs: pullRequests(states: MERGED, last: $mergedSample) {
      nodes {
        changedFiles
      }
    }
    defaultBranchRef {
      target {
        ... on Commit {
          history(first: $commitSample) {
            nodes {
              changedFilesIfAvailable
              committedDate
            }
          }
        }
      }
    }
  }
}
"""

SECURITY_ALERTS_QUERY = """
query GetSecurityAlerts($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    vulnerabilityAlerts(states: OPEN, first: 1) {
      totalCount
    }
  }
}
"""


class GitHubProvider(BaseVCSProvider):
    """GitHub VCS provider using the REST and GraphQL APIs."""

    def __init__(self, token: str | None = None):
        """
        Initialize GitHub provider.

        Args:
            token: GitHub Personal Access Token or OAuth token. If not provided,
                   reads from GITHUB_TOKEN environment variable.

        Raises:
            ValueError: If token is not provided and GITHUB_TOKEN env var is not set
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        if not self.token or len(self.token) == 0:
            raise ValueError(
                "GITHUB_TOKEN is required for GitHub provider.\n"
                "\n"
                "To get started:\n"
                "1. Create a GitHub Personal Access Token (classic):\n"
                "   https://github.com/settings/tokens/new\n"
                "2. Select scopes: 'public_repo' and 'security_events'\n"
                "3. Set the token:\n"
                "   export GITHUB_TOKEN='your_token_here'  # Linux/macOS\n"
                "   or add to your .env file: GITHUB_TOKEN=your_token_here\n"
            )

    def get_platform_name(self) -> str:
        """Return 'github' as the platform identifier."""
        return "github"

    def validate_credentials(self) -> bool:
        """Check if GitHub token is configured."""
        return self.token is not None and len(self.token) > 0

    def get_repository_url(self, owner: str, repo: str) -> str:
        """Construct GitHub repository URL."""
        return f"https://github.com/{owner}/{repo}"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
        }

    async def _rest_get(
        self, path: str, params: dict[str, Any] | None = None
    ) -> httpx.Response:
        """
        Issue a GET against the REST API.

        404 is raised as NotFoundError and any other 4xx/5xx as VCSError.
        Success codes (200, 202, 204) are returned to the caller.
        """
        client = await _get_async_http_client()
        try:
            response = await client.get(
                f"{GITHUB_REST_API}{path}",
                params=params,
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            raise VCSError(f"GitHub request failed for {path}: {e}") from e

        if response.status_code == 404:
            raise NotFoundError(f"Not found: {path}")
        if response.status_code >= 400:
            raise VCSError(
                f"GitHub API returned {response.status_code} for {path}",
                status_code=response.status_code,
            )
        return response

    async def _query_graphql(
        self, query: str, variables: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Execute GraphQL query against GitHub API.

        Args:
            query: GraphQL query string
            variables: Query variables

        Returns:
            Response data dictionary

        Raises:
            VCSError: If the API returns an HTTP error or GraphQL errors
        """
        client = await _get_async_http_client()
        try:
            response = await client.post(
                GITHUB_GRAPHQL_API,
                json={"query": query, "variables": variables},
                headers=self._headers(),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise VCSError(
                f"GitHub GraphQL request failed: {e}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise VCSError(f"GitHub GraphQL request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise VCSError(f"GitHub GraphQL returned a non-JSON body: {e}") from e
        if "errors" in data:
            raise VCSError(f"GitHub API Errors: {data['errors']}")

        return data.get("data") or {}

    async def get_repo_metadata(self, owner: str, repo: str) -> dict[str, Any]:
        response = await self._rest_get(f"/repos/{owner}/{repo}")
        return response.json()

    async def get_commit_activity(self, owner: str, repo: str) -> list[dict[str, Any]]:
        response = await self._rest_get(f"/repos/{owner}/{repo}/stats/commit_activity")
        if response.status_code == 202:
            raise StatsComputingError(
                f"Commit activity for {owner}/{repo} is still being computed"
            )
        if response.status_code == 204:
            return []
        return response.json()

    async def list_contributors(
        self, owner: str, repo: str, per_page: int = 100
    ) -> list[dict[str, Any]]:
        response = await self._rest_get(
            f"/repos/{owner}/{repo}/contributors", params={"per_page": per_page}
        )
        # 204 No Content means the repository is empty
        if response.status_code == 204:
            return []
        return response.json() or []

    async def query_pr_and_issue_aggregate(
        self,
        owner: str,
        repo: str,
        merged_pr_sample: int = 50,
        commit_sample: int = 100,
    ) -> dict[str, Any]:
        variables = {
            "owner": owner,
            "name": repo,
            "mergedSample": merged_pr_sample,
            "commitSample": commit_sample,
        }
        data = await self._query_graphql(PR_AGGREGATE_QUERY, variables)
        if data.get("repository") is None:
            raise NotFoundError(f"Repository {owner}/{repo} not found or is inaccessible.")
        return data["repository"]

    async def path_exists(self, owner: str, repo: str, path: str) -> bool:
        try:
            await self._rest_get(f"/repos/{owner}/{repo}/contents/{path}")
        except NotFoundError:
            return False
        return True

    async def query_security_alert_count(self, owner: str, repo: str) -> int:
        data = await self._query_graphql(
            SECURITY_ALERTS_QUERY, {"owner": owner, "name": repo}
        )
        repository = data.get("repository") or {}
        alerts = repository.get("vulnerabilityAlerts") or {}
        return alerts.get("totalCount", 0)

    async def get_readme(self, owner: str, repo: str) -> dict[str, Any]:
        response = await self._rest_get(f"/repos/{owner}/{repo}/readme")
        data = response.json()
        content = base64.b64decode(data.get("content", "")).decode(
            "utf-8", errors="replace"
        )
        return {"content": content, "size": data.get("size", len(content))}

    async def list_releases(
        self, owner: str, repo: str, per_page: int = 100
    ) -> list[dict[str, Any]]:
        response = await self._rest_get(
            f"/repos/{owner}/{repo}/releases", params={"per_page": per_page}
        )
        return response.json() or []

    async def get_rate_limit_status(self) -> dict[str, int]:
        response = await self._rest_get("/rate_limit")
        core = response.json()["resources"]["core"]
        return {
            "limit": core["limit"],
            "remaining": core["remaining"],
            "reset": core["reset"],
        }


PROVIDER = GitHubProvider
