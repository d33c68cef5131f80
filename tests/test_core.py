"""
Tests for the combined analysis entry point.
"""

from unittest.mock import AsyncMock, patch

import pytest

from repo_maturity.core import analyze_repositories_with_scoring
from repo_maturity.models import RepositoryMetrics


@pytest.fixture
def collected(healthy_metrics):
    """Patch collection to return one healthy and one errored record."""
    failed = RepositoryMetrics.failed("alice", "gone", "Not found")
    with patch(
        "repo_maturity.core.analyze_repositories",
        new_callable=AsyncMock,
        return_value=[healthy_metrics, failed],
    ) as mock_collect:
        yield mock_collect


async def test_full_and_summary(collected, healthy_metrics):
    """Test both artefacts are returned by default."""
    results = await analyze_repositories_with_scoring(
        AsyncMock(), "alice", ["widget", "gone"]
    )

    assert results[0]["metrics"] == healthy_metrics
    assert results[0]["summary"]["repo"] == "widget"
    assert results[1].is_error is True
    collected.assert_awaited_once()


async def test_summary_only(collected):
    """Test only the summary is returned."""
    results = await analyze_repositories_with_scoring(
        AsyncMock(), "alice", ["widget", "gone"], include_full=False
    )
    assert set(results[0]) == {"repo", "scores", "signals", "risk_flags", "strengths"}
    assert isinstance(results[1], RepositoryMetrics)


async def test_metrics_only(collected, healthy_metrics):
    """Test only the metrics record is returned."""
    results = await analyze_repositories_with_scoring(
        AsyncMock(), "alice", ["widget", "gone"], include_summary=False
    )
    assert results[0] == healthy_metrics
