"""Shared fixtures: an in-memory GitHub API behind httpx.MockTransport."""

from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from tools.repo_stats.client import RepoStatsClient

API = "https://api.github.com"


class FakeGitHub:
    """Route requests by URL path and record them."""

    def __init__(self):
        self.routes: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def route(
        self,
        path: str,
        body: Any = None,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.routes[path] = lambda request: httpx.Response(status, json=body, headers=headers)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responder = self.routes.get(request.url.path)
        if responder is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return responder(request)

    def client(self) -> RepoStatsClient:
        return RepoStatsClient(transport=httpx.MockTransport(self.handler))

    @property
    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]


def link_header(**rels: str) -> str:
    """Build a Link header, e.g. link_header(next=url, last=url)."""
    return ", ".join(f'<{url}>; rel="{rel}"' for rel, url in rels.items())


def commit_listing(newest: str = "head", oldest: str = "root") -> Callable[[httpx.Request], httpx.Response]:
    """Default commit listing spread over three pages, newest first."""
    url = f"{API}/repos/octo/demo/commits"

    def respond(request: httpx.Request) -> httpx.Response:
        page = request.url.params.get("page")
        if page == "3":
            return httpx.Response(200, json=[{"sha": "middle"}, {"sha": oldest}])
        return httpx.Response(
            200,
            json=[{"sha": newest}, {"sha": "older"}],
            headers={"Link": link_header(next=f"{url}?page=2", last=f"{url}?page=3")},
        )

    return respond


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()
