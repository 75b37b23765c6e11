"""
Cursor pagination aggregation for "fetch all" operations.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from todi_cli import config
from todi_cli.exceptions import PaginationError

PageFetcher = Callable[[dict[str, str]], tuple[list[Any], str]]


def collect_pages(
    fetch_page: PageFetcher,
    params: dict[str, str] | None = None,
    *,
    page_size: int = config.PAGE_LIMIT,
    max_pages: int = config.PAGINATION_MAX_PAGES,
) -> list[Any]:
    """Follow ``next_cursor`` until the server returns an empty one.

    ``limit`` is forced to *page_size*. A ``cursor`` already present in
    *params* is used as the starting point. Items are returned in server
    order. Any error from *fetch_page* propagates and nothing collected so
    far is returned.

    Raises PaginationError when the server repeats a cursor or more than
    *max_pages* pages are requested.
    """
    query = dict(params or {})
    query["limit"] = str(page_size)
    cursor = query.pop("cursor", "") or ""
    seen: set[str] = set()
    items: list[Any] = []
    pages = 0

    while True:
        if pages >= max_pages:
            raise PaginationError(f"pagination exceeded {max_pages} pages; aborting")
        page_params = dict(query)
        if cursor:
            page_params["cursor"] = cursor
        page, next_cursor = fetch_page(page_params)
        pages += 1
        items.extend(page)
        if not next_cursor:
            return items
        if next_cursor in seen or next_cursor == cursor:
            raise PaginationError(f"pagination cursor repeated: {next_cursor}")
        seen.add(next_cursor)
        cursor = next_cursor
