"""
Command-line interface for repo-maturity.
"""

import asyncio
import json
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from repo_maturity.config import set_verify_ssl
from repo_maturity.core import AnalysisOutput, analyze_repositories_with_scoring
from repo_maturity.http_client import close_http_client
from repo_maturity.models import RepositoryMetrics
from repo_maturity.vcs import get_vcs_provider

# --- Typer App ---
app = typer.Typer(no_args_is_help=True)
console = Console()


@app.callback()
def main():
    """Score GitHub repositories for maturity and flag gaming patterns."""


# --- Helper Functions ---


def to_jsonable(item: AnalysisOutput) -> dict[str, Any]:
    """Convert one analysis output into plain JSON-ready data."""
    if isinstance(item, RepositoryMetrics):
        return item.to_dict()
    if "metrics" in item:
        return {"metrics": item["metrics"].to_dict(), "summary": item["summary"]}
    return item


def _score_color(score: float) -> str:
    if score >= 7:
        return "green"
    if score >= 4:
        return "yellow"
    return "red"


def display_results(outputs: list[AnalysisOutput]) -> None:
    """Display summaries in a rich table."""
    table = Table(title="Repository Maturity Report")
    table.add_column("Repository", justify="left", style="cyan", no_wrap=True)
    table.add_column("Overall", justify="center")
    table.add_column("Activity", justify="center")
    table.add_column("Collab", justify="center")
    table.add_column("Quality", justify="center")
    table.add_column("Docs", justify="center")
    table.add_column("Risk Flags", justify="left")
    table.add_column("Strengths", justify="left")

    for item in outputs:
        if isinstance(item, RepositoryMetrics):
            table.add_row(
                item.repository,
                "[red]skipped[/red]",
                "-",
                "-",
                "-",
                "-",
                f"[red]{item.error}[/red]",
                "",
            )
            continue

        summary = item["summary"] if "summary" in item else item
        scores = summary["scores"]
        overall = scores["overall"]
        flags = ", ".join(flag["flag"] for flag in summary["risk_flags"])
        table.add_row(
            summary["repo"],
            f"[{_score_color(overall)}]{overall}[/{_score_color(overall)}]",
            str(scores["activity"]),
            str(scores["collaboration"]),
            str(scores["quality_signals"]),
            str(scores["documentation"]),
            flags or "[green]none[/green]",
            ", ".join(summary["strengths"]),
        )

    console.print(table)


async def _run_analysis(
    owner: str,
    repos: list[str],
    token: str | None,
    include_full: bool,
) -> list[AnalysisOutput]:
    client = get_vcs_provider("github", token=token)
    try:
        return await analyze_repositories_with_scoring(
            client, owner, repos, include_full=include_full, include_summary=True
        )
    finally:
        await close_http_client()


@app.command()
def analyze(
    owner: str = typer.Argument(..., help="Account that owns the repositories."),
    repos: list[str] = typer.Argument(..., help="Repository names to analyze."),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Print results as JSON instead of a table.",
    ),
    summary_only: bool = typer.Option(
        False,
        "--summary-only",
        "-s",
        help="Omit the full metrics record from JSON output.",
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure",
        help="Disable SSL certificate verification for HTTPS requests.",
    ),
    token: str | None = typer.Option(
        None,
        "--token",
        help="GitHub token (default: GITHUB_TOKEN environment variable or .env).",
    ),
):
    """Analyze repositories of one owner and report maturity scores."""
    set_verify_ssl(not insecure)

    try:
        outputs = asyncio.run(
            _run_analysis(owner, repos, token, include_full=not summary_only)
        )
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    if output_json:
        typer.echo(json.dumps([to_jsonable(item) for item in outputs], indent=2))
    else:
        display_results(outputs)

    if all(isinstance(item, RepositoryMetrics) for item in outputs):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
