"""
Repository maturity scoring with anti-gaming heuristics.
"""

from repo_maturity.collector import analyze_repositories, check_rate_limit
from repo_maturity.core import analyze_repositories_with_scoring
from repo_maturity.summary import generate_summary

__version__ = "0.1.0"

__all__ = [
    "analyze_repositories",
    "analyze_repositories_with_scoring",
    "check_rate_limit",
    "generate_summary",
]
