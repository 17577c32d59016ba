"""Run statistics loads off the caller's thread and deliver the latest result."""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from shared.logger import get_logger

from .client import RepoStatsClient
from .exceptions import RepoStatsError
from .models import Credentials
from .view import NO_DESCRIPTION, ContributorActivity, RepoSummary

logger = get_logger(__name__)


def load_summary(client: RepoStatsClient, credentials: Credentials) -> RepoSummary:
    """
    Fetch everything the aggregate view needs.

    A failure fetching the description is replaced with a placeholder; any
    other failure aborts the load.
    """
    owner, repo, token = credentials.owner, credentials.repo, credentials.token
    logger.info(f"Loading statistics for {credentials.full_name}")

    name = client.get_repo_name(owner, repo, token)
    try:
        description = client.get_repo_description(owner, repo, token)
    except RepoStatsError as e:
        logger.warning(f"Could not fetch description for {credentials.full_name}: {e}")
        description = NO_DESCRIPTION

    return RepoSummary(
        name=name or repo,
        description=description,
        commit_count=client.get_commit_count(owner, repo, token),
        branch_count=client.get_branch_count(owner, repo, token),
        contributors=client.get_contributors(owner, repo, token),
        languages=client.get_language_usage(owner, repo, token),
    )


def load_contributor_activity(
    client: RepoStatsClient, credentials: Credentials, login: str
) -> ContributorActivity:
    """Fetch all commits by one contributor."""
    commits = client.get_all_commits_by_contributor(
        credentials.owner, credentials.repo, login, credentials.token
    )
    return ContributorActivity(login=login, commits=commits)


class StatsLoader:
    """
    Background loader for one repository.

    Each new load supersedes the previous one: callbacks of a superseded load
    are never invoked, even if its future completes later.
    """

    def __init__(
        self,
        client: RepoStatsClient,
        credentials: Credentials,
        max_workers: int = 2,
    ):
        self.client = client
        self.credentials = credentials
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="repo-stats")
        self._lock = threading.Lock()
        self._generation = 0

    def load_summary(
        self,
        on_result: Optional[Callable[[RepoSummary], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> "Future[RepoSummary]":
        """Start loading the aggregate view."""
        return self._submit(load_summary, on_result, on_error, self.client, self.credentials)

    def load_contributor(
        self,
        login: str,
        on_result: Optional[Callable[[ContributorActivity], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> "Future[ContributorActivity]":
        """Start loading a contributor drill-down."""
        return self._submit(
            load_contributor_activity, on_result, on_error, self.client, self.credentials, login
        )

    def cancel(self) -> None:
        """Abandon the in-flight load; its result will be ignored."""
        with self._lock:
            self._generation += 1

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def shutdown(self, wait: bool = True) -> None:
        self.cancel()
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "StatsLoader":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown(wait=False)

    def _submit(self, fn, on_result, on_error, *args) -> Future:
        with self._lock:
            self._generation += 1
            generation = self._generation

        future = self._executor.submit(fn, *args)

        def deliver(done: Future) -> None:
            if done.cancelled() or not self.is_current(generation):
                logger.debug("Dropping result of superseded load")
                return
            exc = done.exception()
            if exc is not None:
                if on_error is not None:
                    on_error(exc)
            elif on_result is not None:
                on_result(done.result())

        future.add_done_callback(deliver)
        return future
