"""Exceptions for the repository statistics client."""

from typing import Optional


class RepoStatsError(Exception):
    """Base class for repository statistics failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class RequestFailed(RepoStatsError):
    """
    The GitHub API returned a non-success status, or the request never completed.

    status_code is None for transport errors (timeouts, connection failures).
    endpoint is the URL path of the request; it never includes credentials.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
    ):
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class MalformedResponse(RepoStatsError):
    """The response body does not have the expected JSON shape."""


class NotConfigured(RepoStatsError):
    """Owner or repository could not be resolved before calling the API."""
