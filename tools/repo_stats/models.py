"""Request-scoped data structures for the repository statistics client."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Credentials:
    """Repository coordinates and the token used to reach them."""

    owner: str
    repo: str
    token: str = field(default="", repr=False)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class CommitRange:
    """Oldest and newest commit of the default branch."""

    from_sha: str
    to_sha: str

    @property
    def spec(self) -> str:
        """Range in the form expected by the compare endpoint."""
        return f"{self.from_sha}...{self.to_sha}"


@dataclass
class Page:
    """One page of a list endpoint plus its Link relations."""

    items: List[Any]
    links: Dict[str, str] = field(default_factory=dict)

    @property
    def last_url(self) -> Optional[str]:
        return self.links.get("last")
