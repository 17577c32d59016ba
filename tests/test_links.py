"""Tests for pagination link extraction."""

import httpx

from tools.repo_stats.links import page_links
from tools.repo_stats.models import Page

NEXT = "https://api.github.com/repos/octo/demo/commits?page=2"
LAST = "https://api.github.com/repos/octo/demo/commits?page=5"
FIRST = "https://api.github.com/repos/octo/demo/commits?page=1"


def response_with(link=None):
    headers = {"Link": link} if link is not None else {}
    return httpx.Response(200, json=[], headers=headers)


class TestPageLinks:
    """Test page_links."""

    def test_extract_last(self):
        links = page_links(response_with(f'<{NEXT}>; rel="next", <{LAST}>; rel="last"'))
        assert links["last"] == LAST

    def test_order_independent(self):
        links = page_links(response_with(f'<{LAST}>; rel="last", <{FIRST}>; rel="first", <{NEXT}>; rel="next"'))
        assert links["last"] == LAST
        assert links["next"] == NEXT

    def test_all_relations(self):
        prev = "https://api.github.com/repos/octo/demo/commits?page=1&per_page=30"
        header = f'<{prev}>; rel="prev", <{NEXT}>; rel="next", <{LAST}>; rel="last", <{FIRST}>; rel="first"'

        assert page_links(response_with(header)) == {
            "prev": prev,
            "next": NEXT,
            "last": LAST,
            "first": FIRST,
        }

    def test_extra_whitespace_and_params(self):
        header = f'<{NEXT}> ;  rel="next",  <{LAST}>; title="end"; rel="last"'
        assert page_links(response_with(header))["last"] == LAST

    def test_missing_header(self):
        assert page_links(response_with()) == {}

    def test_missing_relation(self):
        assert "last" not in page_links(response_with(f'<{NEXT}>; rel="next"'))


class TestPage:
    """Test Page navigation helpers."""

    def test_last_url(self):
        page = Page(items=[1, 2], links={"next": NEXT, "last": LAST})
        assert page.last_url == LAST

    def test_no_links(self):
        assert Page(items=[]).last_url is None
