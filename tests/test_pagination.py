"""Tests for pagination.py — cursor following, cycle and page-cap guards."""

import pytest

from todi_cli.exceptions import ApiError, PaginationError
from todi_cli.pagination import collect_pages


class FakePager:
    """Returns canned pages keyed by the cursor it is asked for."""

    def __init__(self, pages):
        self.pages = pages
        self.calls = []

    def __call__(self, params):
        self.calls.append(dict(params))
        return self.pages[params.get("cursor", "")]


class TestCollectPages:
    def test_follows_cursor_until_empty(self):
        pager = FakePager({"": (["a", "b"], "c1"), "c1": (["c"], "")})
        assert collect_pages(pager, {"project_id": "p1"}) == ["a", "b", "c"]
        assert pager.calls == [
            {"project_id": "p1", "limit": "200"},
            {"project_id": "p1", "limit": "200", "cursor": "c1"},
        ]

    def test_empty_first_page(self):
        pager = FakePager({"": ([], "")})
        assert collect_pages(pager) == []
        assert len(pager.calls) == 1

    def test_limit_is_forced(self):
        pager = FakePager({"": (["a"], "")})
        collect_pages(pager, {"limit": "5"}, page_size=100)
        assert pager.calls[0]["limit"] == "100"

    def test_starts_from_given_cursor(self):
        pager = FakePager({"c2": (["z"], "")})
        assert collect_pages(pager, {"cursor": "c2"}) == ["z"]

    def test_repeated_cursor(self):
        pager = FakePager({"": (["a"], "c1"), "c1": (["b"], "c2"), "c2": (["c"], "c1")})
        with pytest.raises(PaginationError) as exc_info:
            collect_pages(pager)
        assert "c1" in str(exc_info.value)
        assert len(pager.calls) == 3

    def test_self_referencing_cursor(self):
        pager = FakePager({"": (["a"], "c1"), "c1": (["b"], "c1")})
        with pytest.raises(PaginationError):
            collect_pages(pager)

    def test_page_cap(self):
        counter = iter(range(100))

        def endless(params):
            return ["x"], f"c{next(counter)}"

        with pytest.raises(PaginationError) as exc_info:
            collect_pages(endless, max_pages=3)
        assert "3 pages" in str(exc_info.value)

    def test_error_discards_partial_results(self):
        def failing(params):
            if params.get("cursor"):
                raise ApiError(500, "Internal Server Error", "boom")
            return ["a"], "c1"

        with pytest.raises(ApiError):
            collect_pages(failing)

    def test_params_not_mutated(self):
        params = {"cursor": "c1", "label": "home"}
        pager = FakePager({"c1": ([], "")})
        collect_pages(pager, params)
        assert params == {"cursor": "c1", "label": "home"}
