"""Resolve owner/repo from the values a caller has at hand."""

import re
from typing import Optional, Tuple

from .exceptions import NotConfigured

# https://github.com/owner/repo(.git) and git@github.com:owner/repo(.git)
_GITHUB_REMOTE_RE = re.compile(r"github\.com[:/](?P<owner>[^/]+)/(?P<repo>.+?)(?:\.git)?/?$")


def parse_github_remote(remote_url: str) -> Optional[Tuple[str, str]]:
    """
    Extract owner and repository name from a GitHub remote URL.

    Args:
        remote_url: Value of remote.origin.url

    Returns:
        (owner, repo) or None if the URL does not point at github.com
    """
    match = _GITHUB_REMOTE_RE.search(remote_url.strip())
    if not match:
        return None
    return match.group("owner"), match.group("repo")


def resolve_repository(
    repo: Optional[str] = None,
    remote_url: Optional[str] = None,
) -> Tuple[str, str]:
    """
    Resolve (owner, repo) from "owner/repo" or a remote URL.

    Raises:
        NotConfigured: If neither value identifies a repository
    """
    if repo:
        owner, _, name = repo.strip().partition("/")
        if not owner or not name or "/" in name:
            raise NotConfigured(f"Invalid repo format. Use 'owner/repo', got: {repo}")
        return owner, name

    if remote_url:
        parsed = parse_github_remote(remote_url)
        if parsed is None:
            raise NotConfigured(f"Not a GitHub remote: {remote_url}")
        return parsed

    raise NotConfigured("No repository given. Use --repo owner/repo or --remote URL")
