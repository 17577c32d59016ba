"""Pagination links from GitHub's Link response header."""

from typing import Dict

import httpx


def page_links(response: httpx.Response) -> Dict[str, str]:
    """
    Map each Link relation of a response to its URL.

    Relations may appear in any order alongside first/prev/next.

    Args:
        response: API response

    Returns:
        Dict of relation -> URL (empty if there is no Link header)
    """
    return {rel: link["url"] for rel, link in response.links.items() if link.get("url")}
