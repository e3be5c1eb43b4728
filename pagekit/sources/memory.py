"""In-memory query sources over a Python sequence."""

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar

from pagekit.core.exceptions import InvalidPagingError

T = TypeVar("T")


def parse_sort_key(key: str) -> tuple[str, bool]:
    """Return (field, descending) for "field", "+field" or "-field"."""
    if key.startswith("-"):
        field, descending = key[1:], True
    elif key.startswith("+"):
        field, descending = key[1:], False
    else:
        field, descending = key, False
    if not field:
        raise InvalidPagingError("Sort field is empty", details={"sort_key": key})
    return field, descending


def read_field(item: Any, field: str) -> Any:
    if isinstance(item, Mapping):
        return item[field]
    return getattr(item, field)


class SequenceQuery(Generic[T]):
    """Immutable query over a sequence; skip/limit/sort return new queries."""

    def __init__(self, items: Iterable[T], skip: int = 0, limit: int | None = None) -> None:
        if skip < 0:
            raise InvalidPagingError("skip must not be negative", details={"skip": skip})
        if limit is not None and limit < 0:
            raise InvalidPagingError("limit must not be negative", details={"limit": limit})
        self._items = tuple(items)
        self._skip = skip
        self._limit = limit

    def _window(self) -> list[T]:
        end = None if self._limit is None else self._skip + self._limit
        return list(self._items[self._skip:end])

    def count(self) -> int:
        return len(self._items)

    def skip(self, n: int) -> "SequenceQuery[T]":
        return type(self)(self._items, skip=n, limit=self._limit)

    def limit(self, n: int | None) -> "SequenceQuery[T]":
        return type(self)(self._items, skip=self._skip, limit=n)

    def sort(self, key: str) -> "SequenceQuery[T]":
        field, descending = parse_sort_key(key)
        ordered = sorted(self._items, key=lambda item: read_field(item, field), reverse=descending)
        return type(self)(ordered, skip=self._skip, limit=self._limit)

    def to_list(self) -> list[T]:
        return self._window()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(len={len(self._items)}, skip={self._skip}, limit={self._limit})"


class AsyncSequenceQuery(SequenceQuery[T]):
    """SequenceQuery with awaitable reads; each read yields to the loop once."""

    async def count(self) -> int:  # type: ignore[override]
        await asyncio.sleep(0)
        return super().count()

    async def to_list(self) -> list[T]:  # type: ignore[override]
        await asyncio.sleep(0)
        return self._window()
