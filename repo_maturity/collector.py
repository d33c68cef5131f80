"""
Batch collection across repositories with rate-limit awareness.
"""

import asyncio
import time
from datetime import datetime, timezone

from rich.console import Console

from repo_maturity.aggregator import analyze_repository
from repo_maturity.config import (
    DEFAULT_COLLECTOR_CONFIG,
    DEFAULT_DETECTION_CONFIG,
    CollectorConfig,
    DetectionConfig,
)
from repo_maturity.models import RateLimitStatus, RepositoryMetrics
from repo_maturity.vcs.base import BaseVCSProvider

console = Console(stderr=True)

# Assumed when the rate-limit endpoint itself fails
DEFAULT_RATE_LIMIT = 5000
DEFAULT_REMAINING = 100
DEFAULT_RESET_WINDOW_SECONDS = 3600


async def check_rate_limit(client: BaseVCSProvider) -> RateLimitStatus:
    """
    Read the core REST quota.

    Returns an optimistic default when the status cannot be read so a broken
    rate-limit endpoint never blocks collection.
    """
    try:
        status = await client.get_rate_limit_status()
        reset_timestamp = float(status["reset"])
        return RateLimitStatus(
            limit=status["limit"],
            remaining=status["remaining"],
            reset_timestamp=reset_timestamp,
            reset_at=datetime.fromtimestamp(reset_timestamp, timezone.utc).isoformat(),
        )
    except Exception as e:
        console.print(f"  [dim]Rate limit status unavailable ({e}), assuming quota[/dim]")
        return RateLimitStatus(
            limit=DEFAULT_RATE_LIMIT,
            remaining=DEFAULT_REMAINING,
            reset_timestamp=time.time() + DEFAULT_RESET_WINDOW_SECONDS,
            reset_at="unknown",
        )


async def _wait_for_quota(client: BaseVCSProvider, config: CollectorConfig) -> None:
    status = await check_rate_limit(client)
    if status.remaining >= config.rate_limit_floor:
        return
    wait_seconds = max(0.0, status.reset_timestamp - time.time()) + config.reset_margin_seconds
    console.print(
        f"  [dim]Rate limit low ({status.remaining}/{status.limit} remaining), "
        f"waiting {wait_seconds:.0f}s until reset...[/dim]"
    )
    await asyncio.sleep(wait_seconds)


async def analyze_repositories(
    client: BaseVCSProvider,
    owner: str,
    repo_names: list[str],
    *,
    config: CollectorConfig | None = None,
    detection_config: DetectionConfig | None = None,
) -> list[RepositoryMetrics]:
    """
    Analyze many repositories of one owner in sequential batches.

    Before each batch the remaining quota is checked and, when it is below the
    floor, collection sleeps until the quota resets. Repositories within a
    batch are analyzed concurrently.

    Args:
        client: Authenticated VCS provider.
        owner: Account that owns every repository.
        repo_names: Repository names, analyzed in batches of ``config.batch_size``.
        config: Collector limits; defaults to ``DEFAULT_COLLECTOR_CONFIG``.
        detection_config: Thresholds used for the derived gaming signals.

    Returns:
        One RepositoryMetrics per input name, in input order. Failed
        repositories are returned as errored records.

    Raises:
        ValueError: If the configured batch size is below 1.
    """
    config = config or DEFAULT_COLLECTOR_CONFIG
    detection_config = detection_config or DEFAULT_DETECTION_CONFIG
    if config.batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {config.batch_size}")

    results: list[RepositoryMetrics] = []
    for start in range(0, len(repo_names), config.batch_size):
        batch = repo_names[start : start + config.batch_size]
        await _wait_for_quota(client, config)

        console.print(
            f"[dim]Analyzing {owner}: {', '.join(batch)} "
            f"({start + len(batch)}/{len(repo_names)})[/dim]"
        )
        batch_results = await asyncio.gather(
            *(
                analyze_repository(
                    client,
                    owner,
                    name,
                    collector_config=config,
                    detection_config=detection_config,
                )
                for name in batch
            )
        )
        results.extend(batch_results)

    return results
