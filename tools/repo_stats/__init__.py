"""Repo Stats - Fetch commit, branch, contributor and language statistics from GitHub."""

from .client import RepoStatsClient
from .exceptions import MalformedResponse, NotConfigured, RepoStatsError, RequestFailed
from .models import CommitRange, Credentials

__all__ = [
    "RepoStatsClient",
    "RepoStatsError",
    "RequestFailed",
    "MalformedResponse",
    "NotConfigured",
    "CommitRange",
    "Credentials",
]
