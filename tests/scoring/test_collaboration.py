"""
Tests for the collaboration score.
"""

from repo_maturity.models import CollaborationMetrics
from repo_maturity.scoring.collaboration import compute_collaboration_score


def _collaboration(**fields) -> CollaborationMetrics:
    base = {
        "total_prs": 10,
        "prs_merged": 4,
        "prs_closed": 2,
        "prs_open": 4,
        "merge_rate": 0.4,
        "average_pr_size_files": 0.5,
        "external_contributors_count": 0,
    }
    base.update(fields)
    return CollaborationMetrics(**base)


class TestCollaborationScore:
    """Test the compute_collaboration_score function."""

    def test_no_prs_is_exactly_neutral(self):
        """Test that zero PRs scores 5.0 whatever the other fields say."""
        collaboration = _collaboration(
            total_prs=0,
            merge_rate=0.0,
            average_pr_size_files=80,
            external_contributors_count=12,
        )
        assert compute_collaboration_score(collaboration) == 5.0

    def test_neutral_baseline(self):
        """Test a record that triggers no adjustment."""
        assert compute_collaboration_score(_collaboration()) == 5.0

    def test_healthy_workflow(self):
        """Test healthy merge rate, community and small PRs."""
        collaboration = _collaboration(
            merge_rate=0.8,
            external_contributors_count=3,
            average_pr_size_files=6,
            prs_open=1,
        )
        assert compute_collaboration_score(collaboration) == 10.0

    def test_merge_rate_bands(self):
        """Test low and frictionless merge rates."""
        assert compute_collaboration_score(_collaboration(merge_rate=0.2)) == 3.0
        assert compute_collaboration_score(_collaboration(merge_rate=0.99)) == 4.5

    def test_external_contributors(self):
        """Test one external contributor."""
        assert (
            compute_collaboration_score(_collaboration(external_contributors_count=1))
            == 6.0
        )

    def test_pr_size_penalties(self):
        """Test medium and giant PRs."""
        assert compute_collaboration_score(_collaboration(average_pr_size_files=30)) == 4.5
        assert compute_collaboration_score(_collaboration(average_pr_size_files=15.5)) == 4.5
        assert compute_collaboration_score(_collaboration(average_pr_size_files=60)) == 3.0

    def test_stale_pr_penalty(self):
        """Test more than half of PRs still open."""
        assert compute_collaboration_score(_collaboration(prs_open=6)) == 4.0

    def test_stale_pr_penalty_needs_enough_prs(self):
        """Test that five or fewer PRs are never considered stale."""
        collaboration = _collaboration(total_prs=5, prs_open=4)
        assert compute_collaboration_score(collaboration) == 5.0
