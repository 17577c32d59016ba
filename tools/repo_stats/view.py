"""View model for repository statistics: states and pure renderers."""

from dataclasses import dataclass, field
from enum import Enum
from html import escape
from typing import Any, Dict, List, Optional, Tuple

NO_DESCRIPTION = "No description available"


@dataclass
class RepoSummary:
    """Aggregate statistics shown in the main view."""

    name: str
    description: Optional[str]
    commit_count: int
    branch_count: int
    contributors: List[Dict[str, Any]] = field(default_factory=list)
    languages: Dict[str, float] = field(default_factory=dict)

    @property
    def contributor_count(self) -> int:
        return len(self.contributors)

    @property
    def contributor_logins(self) -> List[str]:
        return [c["login"] for c in self.contributors if c.get("login")]


@dataclass
class ContributorActivity:
    """Commits by a single contributor."""

    login: str
    commits: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def commit_count(self) -> int:
        return len(self.commits)


class ViewKind(str, Enum):
    """Which view is shown."""

    AGGREGATE = "aggregate"
    CONTRIBUTOR_DETAIL = "contributor_detail"


@dataclass(frozen=True)
class ViewState:
    """Current view; login is set only for the contributor detail view."""

    kind: ViewKind
    login: Optional[str] = None

    @classmethod
    def aggregate(cls) -> "ViewState":
        return cls(ViewKind.AGGREGATE)

    @classmethod
    def contributor_detail(cls, login: str) -> "ViewState":
        if not login:
            raise ValueError("Contributor login is required")
        return cls(ViewKind.CONTRIBUTOR_DETAIL, login)


class StatsView:
    """
    Navigation between the aggregate view and a contributor drill-down.

    Attributes:
        state: Current ViewState
    """

    def __init__(self):
        self.state = ViewState.aggregate()

    @property
    def can_go_back(self) -> bool:
        return self.state.kind is ViewKind.CONTRIBUTOR_DETAIL

    def show_contributor(self, login: str) -> ViewState:
        self.state = ViewState.contributor_detail(login)
        return self.state

    def back(self) -> ViewState:
        self.state = ViewState.aggregate()
        return self.state


def language_slices(languages: Optional[Dict[str, float]]) -> List[Tuple[str, float]]:
    """Chart data: (language, percentage) sorted by share, largest first."""
    if not languages:
        return []
    return sorted(languages.items(), key=lambda x: (-x[1], x[0]))


def render_aggregate_html(summary: RepoSummary) -> str:
    """Render the repository summary as an HTML document."""
    description = summary.description if summary.description is not None else NO_DESCRIPTION
    rows = [
        ("Total commits", f"{summary.commit_count:,}"),
        ("Number of branches", f"{summary.branch_count:,}"),
        ("Number of contributors", f"{summary.contributor_count:,}"),
    ]
    rows.extend((lang, f"{pct:.1f}%") for lang, pct in language_slices(summary.languages))

    table = "\n".join(
        f"    <tr><th>{escape(label)}</th><td>{escape(value)}</td></tr>" for label, value in rows
    )
    return (
        "<html>\n"
        '<body style="font-family: Arial, sans-serif;">\n'
        f"  <h1>{escape(summary.name)}</h1>\n"
        f"  <p>{escape(description)}</p>\n"
        "  <hr/>\n"
        "  <table>\n"
        f"{table}\n"
        "  </table>\n"
        "</body>\n"
        "</html>\n"
    )


def render_contributor_html(activity: ContributorActivity) -> str:
    """Render a contributor's statistics as an HTML document."""
    return (
        "<html>\n"
        '<body style="font-family: Arial, sans-serif;">\n'
        f"  <h1>Statistics for {escape(activity.login)}</h1>\n"
        f"  <p><strong>Total commits:</strong> {activity.commit_count:,}</p>\n"
        "</body>\n"
        "</html>\n"
    )


def render(
    state: ViewState,
    summary: RepoSummary,
    activity: Optional[ContributorActivity] = None,
) -> str:
    """
    Render the HTML for a view state.

    Raises:
        ValueError: If the detail view is requested without matching activity
    """
    if state.kind is ViewKind.AGGREGATE:
        return render_aggregate_html(summary)

    if activity is None or activity.login != state.login:
        raise ValueError(f"No activity loaded for {state.login}")
    return render_contributor_html(activity)
