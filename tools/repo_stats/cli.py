"""CLI interface for Repo Stats."""

import json
import sys
from concurrent.futures import Future
from pathlib import Path
from typing import Any, Dict, List, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from shared.cli import create_table, error, handle_errors, info, print_table, success
from shared.logger import setup_logger

from .client import GITHUB_API_URL, RepoStatsClient
from .exceptions import NotConfigured, RepoStatsError
from .loader import StatsLoader
from .models import Credentials
from .remote import resolve_repository
from .view import ContributorActivity, RepoSummary, StatsView, language_slices, render

console = Console()


def display_summary(summary: RepoSummary, full_name: str) -> None:
    """Display the aggregate repository statistics."""
    title = f"[bold cyan]{summary.name}[/bold cyan]"
    if summary.description:
        title += f"\n[dim]{summary.description}[/dim]"

    console.print(Panel(title, title=full_name))

    console.print("\n[bold yellow]📊 Metrics:[/bold yellow]")
    console.print(f"  Total commits:      [bold]{summary.commit_count:,}[/bold]")
    console.print(f"  Branches:           {summary.branch_count:,}")
    console.print(f"  Contributors:       {summary.contributor_count:,}")
    console.print()


def display_languages(languages: Dict[str, float]) -> None:
    """Display language breakdown."""
    slices = language_slices(languages)
    if not slices:
        info("No language data found")
        return

    console.print("[bold yellow]💻 Language usage:[/bold yellow]")

    table = create_table(title=None)
    table.add_column("Language", style="bold cyan")
    table.add_column("Percentage", justify="right")
    table.add_column("Visual", width=30)

    for lang, percentage in slices:
        bar_length = int((percentage / 100) * 25)
        bar = "█" * bar_length + "░" * (25 - bar_length)
        table.add_row(lang, f"{percentage:.1f}%", bar)

    print_table(table)


def display_contributors(contributors: List[Dict[str, Any]]) -> None:
    """Display the contributor list."""
    if not contributors:
        info("No contributors found")
        return

    console.print("\n[bold yellow]👥 Contributors:[/bold yellow]")

    table = create_table(title=None)
    table.add_column("#", justify="right", style="cyan", width=4)
    table.add_column("Login", style="bold")
    table.add_column("Contributions", justify="right", style="yellow")

    for idx, contrib in enumerate(contributors, 1):
        table.add_row(str(idx), contrib.get("login", "?"), str(contrib.get("contributions", "")))

    print_table(table)


def display_contributor_activity(activity: ContributorActivity, limit: int) -> None:
    """Display a contributor drill-down."""
    console.print(Panel(f"[bold cyan]Statistics for {activity.login}[/bold cyan]"))
    console.print(f"  Total commits: [bold]{activity.commit_count:,}[/bold]\n")

    if not activity.commits:
        info("No commits found")
        return

    table = create_table(title=f"Latest {min(limit, activity.commit_count)} commits")
    table.add_column("SHA", style="cyan", width=8)
    table.add_column("Date", style="dim")
    table.add_column("Message", no_wrap=False)

    for record in activity.commits[:limit]:
        commit = record.get("commit") or {}
        author = commit.get("author") or {}
        message = (commit.get("message") or "").splitlines()
        table.add_row(
            (record.get("sha") or "")[:7],
            (author.get("date") or "")[:10],
            message[0] if message else "",
        )

    print_table(table)


def _wait(future: Future, loader: StatsLoader, description: str) -> Any:
    """Block on a load under a spinner; Ctrl+C abandons it."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        transient=True,
    ) as progress:
        progress.add_task(description, total=None)
        try:
            return future.result()
        except KeyboardInterrupt:
            loader.cancel()
            raise


def _to_json(full_name: str, summary: RepoSummary, activity: Optional[ContributorActivity]) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "repository": full_name,
        "name": summary.name,
        "description": summary.description,
        "commit_count": summary.commit_count,
        "branch_count": summary.branch_count,
        "contributors": summary.contributor_logins,
        "languages": {lang: round(pct, 2) for lang, pct in language_slices(summary.languages)},
    }
    if activity is not None:
        data["contributor"] = {
            "login": activity.login,
            "commit_count": activity.commit_count,
            "commits": [c.get("sha") for c in activity.commits],
        }
    return data


@click.command()
@click.option("--repo", "-r", help="Repository in format 'owner/repo'")
@click.option("--remote", help="Git remote URL, e.g. git@github.com:owner/repo.git")
@click.option(
    "--token",
    envvar="GITHUB_TOKEN",
    default="",
    show_envvar=True,
    help="GitHub personal access token",
)
@click.option("--contributor", "-c", help="Show the commit history of one contributor")
@click.option("--limit", type=click.IntRange(min=1), default=10, help="Commits to list in the contributor view")
@click.option(
    "--output",
    "-o",
    type=click.Choice(["rich", "json"], case_sensitive=False),
    default="rich",
    help="Output format",
)
@click.option("--html", "html_path", type=click.Path(dir_okay=False, path_type=Path), help="Write the HTML view to a file")
@click.option("--api-url", default=GITHUB_API_URL, show_default=True, help="GitHub API root")
@click.option("--timeout", type=float, default=10.0, show_default=True, help="Request timeout in seconds")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@handle_errors
def main(
    repo: Optional[str],
    remote: Optional[str],
    token: str,
    contributor: Optional[str],
    limit: int,
    output: str,
    html_path: Optional[Path],
    api_url: str,
    timeout: float,
    verbose: bool,
):
    """
    Repo Stats - Commit, branch, contributor and language statistics for a GitHub repository.

    Examples:

        \b
        # Repository overview
        repo-stats --repo octocat/Hello-World

        \b
        # Resolve the repository from a remote URL
        repo-stats --remote git@github.com:octocat/Hello-World.git

        \b
        # Drill down into one contributor
        repo-stats --repo octocat/Hello-World --contributor octocat

        \b
        # JSON output
        repo-stats --repo octocat/Hello-World --output json
    """
    # Setup logging
    log_level = "DEBUG" if verbose else "INFO"
    setup_logger("tools.repo_stats", level=log_level)

    try:
        owner, name = resolve_repository(repo=repo, remote_url=remote)
    except NotConfigured as e:
        error(e.message)
        sys.exit(1)

    credentials = Credentials(owner=owner, repo=name, token=token)
    client = RepoStatsClient(base_url=api_url, timeout=timeout)
    view = StatsView()
    activity = None
    exit_code = 0

    with StatsLoader(client, credentials) as loader:
        try:
            summary = _wait(
                loader.load_summary(), loader, f"Fetching stats for {credentials.full_name}..."
            )
        except RepoStatsError as e:
            error(f"Error fetching repository statistics: {e.message}")
            sys.exit(1)

        if contributor:
            view.show_contributor(contributor)
            try:
                activity = _wait(
                    loader.load_contributor(contributor), loader, f"Fetching commits by {contributor}..."
                )
            except RepoStatsError as e:
                # Drill-down failed, stay on the aggregate view
                error(f"Error fetching commits by {contributor}: {e.message}")
                view.back()
                exit_code = 1

    if html_path:
        html_path.write_text(render(view.state, summary, activity), encoding="utf-8")

    if output == "json":
        print(json.dumps(_to_json(credentials.full_name, summary, activity), indent=2))
        sys.exit(exit_code)

    if view.can_go_back:
        display_contributor_activity(activity, limit)
    else:
        display_summary(summary, credentials.full_name)
        display_languages(summary.languages)
        display_contributors(summary.contributors)

    if html_path:
        info(f"HTML written to {html_path}")

    if exit_code == 0:
        success("Fetch completed!")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
