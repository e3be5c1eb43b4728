"""Beanie paging helper, with a stand-in for FindMany (no MongoDB needed)."""

import pytest

from pagekit.core.pagination import PagingRequest
from pagekit.sources.documents import paginate_documents
from pagekit.sources.memory import parse_sort_key

pytestmark = pytest.mark.asyncio


class FakeFindMany:
    """Mutates itself on skip/limit/sort like beanie's FindMany."""

    def __init__(self, rows):
        self.rows = list(rows)
        self.calls = []
        self._skip = 0
        self._limit = None

    def sort(self, key):
        self.calls.append(("sort", key))
        field, descending = parse_sort_key(key)
        self.rows.sort(key=lambda r: r[field], reverse=descending)
        return self

    def skip(self, n):
        self.calls.append(("skip", n))
        self._skip = n
        return self

    def limit(self, n):
        self.calls.append(("limit", n))
        self._limit = n
        return self

    async def count(self):
        self.calls.append("count")
        # FindMany counts with its current skip/limit applied
        window = self.rows[self._skip:]
        return len(window if self._limit is None else window[: self._limit])

    async def to_list(self):
        self.calls.append("to_list")
        return self.rows[self._skip : self._skip + self._limit]


class FakeDocument:
    rows: list = []
    last_query = None
    last_find_args = None

    @classmethod
    def find(cls, *filters, fetch_links=False):
        cls.last_find_args = (filters, fetch_links)
        cls.last_query = FakeFindMany(cls.rows)
        return cls.last_query


@pytest.fixture
def documents(rows):
    FakeDocument.rows = rows
    return FakeDocument


async def test_paginate_documents(documents):
    request = PagingRequest(page_number=3, page_size=10)
    page = await paginate_documents(documents, {"group": {"$gte": 0}}, request=request)
    assert [r["id"] for r in page] == [20, 21, 22, 23, 24]
    assert page.total_count == 25
    assert page.total_pages == 3
    assert documents.last_find_args == (({"group": {"$gte": 0}},), False)


async def test_count_runs_before_window(documents, monkeypatch):
    monkeypatch.setenv("PAGING_CONCURRENT_FETCH", "true")
    request = PagingRequest(page_number=2, page_size=5, sort_by="name", sort_descending=True)
    page = await paginate_documents(documents, request=request, fetch_links=True)
    assert documents.last_query.calls == [
        ("sort", "-name"),
        "count",
        ("skip", 5),
        ("limit", 5),
        "to_list",
    ]
    assert page.total_count == 25
    assert [r["name"] for r in page] == ["item-19", "item-18", "item-17", "item-16", "item-15"]
    assert documents.last_find_args == ((), True)
