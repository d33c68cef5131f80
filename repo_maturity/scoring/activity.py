"""Activity score."""

from repo_maturity.config import ActivityThresholds
from repo_maturity.models import ActivityMetrics
from repo_maturity.scoring.base import clamp_score


def compute_activity_score(
    activity: ActivityMetrics, thresholds: ActivityThresholds = ActivityThresholds()
) -> float:
    """
    Evaluates how steadily the repository is worked on.

    Starts from a neutral 5 and applies:
    - Commits/month in the healthy 2-50 band: +2
    - Below 2 commits/month: -1
    - Above 100 commits/month (possible commit spam): -3
    - Between 50 and 100 commits/month: +1
    - Longest inactivity gap > 180 days: -2, > 90 days: -1
    - Last push > 180 days ago: -2, > 90 days: -1, < 30 days: +1
    - Repository age >= 3 years: +1, >= 1 year: +0.5

    Returns:
        Score clamped to 0-10 with one decimal.
    """
    score = 5.0

    cpm = activity.commits_per_month
    if thresholds.ideal_commits_min <= cpm <= thresholds.ideal_commits_max:
        score += 2
    elif cpm < thresholds.ideal_commits_min:
        score -= 1
    elif cpm > thresholds.commit_spam_threshold:
        score -= 3
    elif cpm > thresholds.ideal_commits_max:
        score += 1

    gap = activity.longest_inactivity_gap_days
    if gap > thresholds.inactivity_days_critical:
        score -= 2
    elif gap > thresholds.inactivity_days_warning:
        score -= 1

    # Unknown push date: no adjustment
    days = activity.days_since_last_push
    if days is not None:
        if days > thresholds.inactivity_days_critical:
            score -= 2
        elif days > thresholds.inactivity_days_warning:
            score -= 1
        elif days < thresholds.recent_push_days:
            score += 1

    if activity.repo_age_years >= thresholds.max_age_bonus_years:
        score += 1
    elif activity.repo_age_years >= thresholds.min_age_bonus_years:
        score += 0.5

    return clamp_score(score)
