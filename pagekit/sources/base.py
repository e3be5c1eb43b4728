"""Query source interfaces consumed by PagedResult."""

from typing import Protocol, TypeVar, runtime_checkable

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Query(Protocol[T_co]):
    """Countable, sliceable source read synchronously."""

    def count(self) -> int:
        """Number of elements matching the query, ignoring skip/limit."""
        ...

    def skip(self, n: int) -> "Query[T_co]":
        ...

    def limit(self, n: int) -> "Query[T_co]":
        ...

    def to_list(self) -> list[T_co]:
        """Materialize the current window in a stable order."""
        ...


@runtime_checkable
class AsyncQuery(Protocol[T_co]):
    """Async counterpart of Query. Beanie's FindMany fits this shape."""

    async def count(self) -> int:
        ...

    def skip(self, n: int) -> "AsyncQuery[T_co]":
        ...

    def limit(self, n: int) -> "AsyncQuery[T_co]":
        ...

    async def to_list(self) -> list[T_co]:
        ...


@runtime_checkable
class SortableQuery(Protocol):
    def sort(self, key: str) -> "SortableQuery":
        """Order by ``field``, ``+field`` (ascending) or ``-field`` (descending)."""
        ...
