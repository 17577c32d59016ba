"""Core GitHub repository statistics client."""

from typing import Any, Dict, List, Optional, Tuple

import httpx

from shared.logger import get_logger

from .exceptions import MalformedResponse, RequestFailed
from .links import page_links
from .models import CommitRange, Page

logger = get_logger(__name__)

GITHUB_API_URL = "https://api.github.com"
COMMITS_PER_PAGE = 100


class RepoStatsClient:
    """
    Fetch repository statistics from the GitHub REST API (v3).

    Every operation takes owner, repo and token explicitly and opens its own
    HTTP client, so one instance can serve any number of repositories.
    """

    def __init__(
        self,
        base_url: str = GITHUB_API_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root
            timeout: Connect/read timeout in seconds
            transport: Optional httpx transport (e.g. httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    # -- public operations -------------------------------------------------

    def get_repo_name(self, owner: str, repo: str, token: str) -> Optional[str]:
        """Return the repository name, or None if the API omits it."""
        with self._client(token) as client:
            return self._fetch_object(client, f"/repos/{owner}/{repo}").get("name")

    def get_repo_description(self, owner: str, repo: str, token: str) -> Optional[str]:
        """Return the repository description, or None if it has none."""
        with self._client(token) as client:
            return self._fetch_object(client, f"/repos/{owner}/{repo}").get("description")

    def get_branch_count(self, owner: str, repo: str, token: str) -> int:
        """
        Count branches.

        Only the first page is counted; repositories with more branches than
        GitHub's default page size are under-reported.
        """
        with self._client(token) as client:
            return len(self._fetch_array(client, f"/repos/{owner}/{repo}/branches"))

    def get_contributors(self, owner: str, repo: str, token: str) -> List[Dict[str, Any]]:
        """Return the first page of contributor records as sent by the API."""
        logger.info(f"Fetching contributors for {owner}/{repo}")
        with self._client(token) as client:
            contributors = self._fetch_array(client, f"/repos/{owner}/{repo}/contributors")

        for contributor in contributors:
            login = contributor.get("login")
            if not isinstance(login, str) or not login:
                raise MalformedResponse("Contributor record has no login")
        return contributors

    def get_language_usage(self, owner: str, repo: str, token: str) -> Dict[str, float]:
        """
        Get the language breakdown as percentages of total bytes.

        Args:
            owner: Repository owner
            repo: Repository name
            token: GitHub token

        Returns:
            Dict of language -> percentage (0-100)

        Raises:
            MalformedResponse: If there is no language data or a count is not a number
        """
        logger.info(f"Fetching languages for {owner}/{repo}")
        with self._client(token) as client:
            data = self._fetch_object(client, f"/repos/{owner}/{repo}/languages")

        for lang, count in data.items():
            if isinstance(count, bool) or not isinstance(count, (int, float)):
                raise MalformedResponse(f"Byte count for {lang!r} is not a number")

        total = sum(data.values())
        if total <= 0:
            raise MalformedResponse(f"No language data for {owner}/{repo}")

        return {lang: count / total * 100 for lang, count in data.items()}

    def get_last_commit_sha(self, owner: str, repo: str, token: str) -> str:
        """SHA of the newest commit: first element of the default commit listing."""
        with self._client(token) as client:
            return self._last_commit_sha(client, owner, repo)

    def get_first_commit_sha(self, owner: str, repo: str, token: str) -> str:
        """SHA of the oldest commit: last element of the last page of the listing."""
        with self._client(token) as client:
            return self._first_commit_sha(client, owner, repo)

    def get_commit_range(self, owner: str, repo: str, token: str) -> CommitRange:
        """
        Resolve the oldest and newest commit of the default branch.

        This relies on GitHub listing commits newest first. If history is
        rewritten between the two lookups the range can be inconsistent.
        """
        with self._client(token) as client:
            return self._commit_range(client, owner, repo)

    def get_commit_count(self, owner: str, repo: str, token: str) -> int:
        """
        Count commits on the default branch.

        Compares the oldest commit with the newest one; the compare total
        excludes the base commit, so one is added back.

        Returns:
            Total commits, or 0 if the compare response has no total_commits
        """
        logger.info(f"Counting commits for {owner}/{repo}")
        with self._client(token) as client:
            commit_range = self._commit_range(client, owner, repo)
            data = self._fetch_object(client, f"/repos/{owner}/{repo}/compare/{commit_range.spec}")

        total = data.get("total_commits")
        if total is None:
            return 0
        if isinstance(total, bool) or not isinstance(total, int):
            raise MalformedResponse("total_commits is not an integer")
        return total + 1

    def get_all_commits_by_contributor(
        self, owner: str, repo: str, contributor: str, token: str
    ) -> List[Dict[str, Any]]:
        """
        Fetch every commit authored by a contributor.

        Pages are requested until one comes back empty. A short page does not
        end the drain.

        Args:
            owner: Repository owner
            repo: Repository name
            contributor: GitHub login of the author
            token: GitHub token

        Returns:
            List of raw commit records in request order
        """
        logger.info(f"Fetching commits by {contributor} in {owner}/{repo}")
        commits: List[Dict[str, Any]] = []

        with self._client(token) as client:
            sha = self._last_commit_sha(client, owner, repo)
            page = 1
            while True:
                items = self._fetch_array(
                    client,
                    f"/repos/{owner}/{repo}/commits",
                    params={
                        "sha": sha,
                        "author": contributor,
                        "per_page": COMMITS_PER_PAGE,
                        "page": page,
                    },
                )
                if not items:
                    break
                commits.extend(items)
                page += 1

        logger.debug(f"Fetched {len(commits)} commits by {contributor} over {page} pages")
        return commits

    # -- primitives --------------------------------------------------------

    def _client(self, token: str) -> httpx.Client:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "repo-stats",
            "Authorization": f"token {token}",
        }
        return httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=self.timeout,
            transport=self.transport,
        )

    def _get(
        self, client: httpx.Client, url: str, params: Optional[Dict[str, Any]] = None
    ) -> Tuple[Any, httpx.Response]:
        """GET a URL and return the decoded JSON body with the response."""
        try:
            response = client.get(url, params=params)
        except httpx.RequestError as e:
            endpoint = httpx.URL(url).path
            logger.error(f"Network error on {endpoint}: {e}")
            raise RequestFailed(f"Network error on {endpoint}: {e}", endpoint=endpoint) from e

        endpoint = response.request.url.path
        logger.debug(f"GET {endpoint} -> {response.status_code}")

        if response.status_code == 404:
            raise RequestFailed(f"Not found: {endpoint}", status_code=404, endpoint=endpoint)
        elif response.status_code == 403:
            raise RequestFailed(
                f"Rate limit exceeded or access forbidden: {endpoint}",
                status_code=403,
                endpoint=endpoint,
            )
        elif not response.is_success:
            raise RequestFailed(
                f"API error {response.status_code}: {endpoint}",
                status_code=response.status_code,
                endpoint=endpoint,
            )

        try:
            return response.json(), response
        except ValueError as e:
            raise MalformedResponse(f"Response from {endpoint} is not valid JSON") from e

    def _fetch_object(self, client: httpx.Client, url: str) -> Dict[str, Any]:
        data, response = self._get(client, url)
        if not isinstance(data, dict):
            raise MalformedResponse(f"Expected a JSON object from {response.request.url.path}")
        return data

    def _fetch_page(
        self, client: httpx.Client, url: str, params: Optional[Dict[str, Any]] = None
    ) -> Page:
        data, response = self._get(client, url, params=params)
        if not isinstance(data, list):
            raise MalformedResponse(f"Expected a JSON array from {response.request.url.path}")
        if not all(isinstance(item, dict) for item in data):
            raise MalformedResponse(f"Expected an array of objects from {response.request.url.path}")
        return Page(items=data, links=page_links(response))

    def _fetch_array(
        self, client: httpx.Client, url: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Any]:
        return self._fetch_page(client, url, params=params).items

    def _fetch_last_page(self, client: httpx.Client, url: str) -> List[Any]:
        """Follow rel="last" if present, else return the first page."""
        page = self._fetch_page(client, url)
        if page.last_url:
            self._check_same_host(page.last_url)
            logger.debug(f"Following last page link for {url}")
            return self._fetch_array(client, page.last_url)
        return page.items

    def _check_same_host(self, url: str) -> None:
        """The token is only ever sent to the API host."""
        target = httpx.URL(url)
        base = httpx.URL(self.base_url)
        if target.is_absolute_url and (target.scheme, target.host, target.port) != (
            base.scheme,
            base.host,
            base.port,
        ):
            raise MalformedResponse(f"Pagination link points outside {base.host}: {target.host}")

    def _last_commit_sha(self, client: httpx.Client, owner: str, repo: str) -> str:
        commits = self._fetch_array(client, f"/repos/{owner}/{repo}/commits")
        return _commit_sha(commits, first=True)

    def _first_commit_sha(self, client: httpx.Client, owner: str, repo: str) -> str:
        commits = self._fetch_last_page(client, f"/repos/{owner}/{repo}/commits")
        return _commit_sha(commits, first=False)

    def _commit_range(self, client: httpx.Client, owner: str, repo: str) -> CommitRange:
        last_sha = self._last_commit_sha(client, owner, repo)
        first_sha = self._first_commit_sha(client, owner, repo)
        return CommitRange(from_sha=first_sha, to_sha=last_sha)


def _commit_sha(commits: List[Any], first: bool = True) -> str:
    """Extract the sha of the first or last commit in a listing."""
    if not commits:
        raise MalformedResponse("Commit listing is empty")

    commit = commits[0] if first else commits[-1]
    sha = commit.get("sha") if isinstance(commit, dict) else None
    if not isinstance(sha, str) or not sha:
        raise MalformedResponse("Commit record has no sha")
    return sha
