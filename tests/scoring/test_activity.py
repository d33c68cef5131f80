"""
Tests for the activity score.
"""

from repo_maturity.config import ActivityThresholds
from repo_maturity.models import ActivityMetrics
from repo_maturity.scoring.activity import compute_activity_score


def _activity(**fields) -> ActivityMetrics:
    base = {
        "repo_age_years": 0.5,
        "commits_per_month": 10.0,
        "longest_inactivity_gap_days": 0,
        "last_push_date": None,
        "days_since_last_push": None,
    }
    base.update(fields)
    return ActivityMetrics(**base)


class TestActivityScore:
    """Test the compute_activity_score function."""

    def test_steady_mature_repository(self):
        """Test healthy cadence, recent push and an old repository."""
        activity = _activity(
            commits_per_month=3,
            longest_inactivity_gap_days=10,
            days_since_last_push=5,
            repo_age_years=4,
        )
        assert compute_activity_score(activity) == 9.0

    def test_unknown_push_date_is_neutral(self):
        """Test that a missing push date applies no adjustment."""
        assert compute_activity_score(_activity()) == 7.0

    def test_low_commit_rate(self):
        """Test below-band commit rate."""
        assert compute_activity_score(_activity(commits_per_month=1)) == 4.0

    def test_commit_spam_penalty(self):
        """Test commit rates above the spam threshold."""
        assert compute_activity_score(_activity(commits_per_month=150)) == 2.0

    def test_high_but_plausible_commit_rate(self):
        """Test commit rates between the healthy band and spam."""
        assert compute_activity_score(_activity(commits_per_month=75)) == 6.0

    def test_inactivity_gap_penalties(self):
        """Test long inactivity gaps."""
        assert compute_activity_score(_activity(longest_inactivity_gap_days=100)) == 6.0
        assert compute_activity_score(_activity(longest_inactivity_gap_days=200)) == 5.0

    def test_stale_push_penalties(self):
        """Test pushes older than the warning and critical thresholds."""
        assert compute_activity_score(_activity(days_since_last_push=100)) == 6.0
        assert compute_activity_score(_activity(days_since_last_push=365)) == 5.0

    def test_age_bonus(self):
        """Test partial and full age bonus."""
        assert compute_activity_score(_activity(repo_age_years=1.5)) == 7.5
        assert compute_activity_score(_activity(repo_age_years=3)) == 8.0

    def test_score_is_clamped(self):
        """Test that the worst case does not go below zero."""
        activity = _activity(
            commits_per_month=500,
            longest_inactivity_gap_days=300,
            days_since_last_push=400,
        )
        assert compute_activity_score(activity) == 0.0

    def test_more_commits_in_band_never_lowers_score(self):
        """Test monotonicity from 1 to 10 commits/month."""
        scores = [
            compute_activity_score(_activity(commits_per_month=cpm))
            for cpm in range(1, 11)
        ]
        assert scores == sorted(scores)

    def test_custom_thresholds(self):
        """Test that thresholds are read from the supplied configuration."""
        thresholds = ActivityThresholds(commit_spam_threshold=200)
        assert compute_activity_score(_activity(commits_per_month=150), thresholds) == 6.0
