"""Pagination helpers.

Page numbers are 1-based: page ``n`` starts at offset ``(n - 1) * page_size``.
A ``PagedResult`` is built from two reads against a query source, a count of
every matching element and a skip/limit window over them.
"""

import asyncio
from typing import Any, Awaitable, Callable, Generic, Iterator, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from pagekit.core.config import get_settings
from pagekit.core.exceptions import InvalidPagingError
from pagekit.core.logging import get_logger, paging_context
from pagekit.sources.base import AsyncQuery, Query

T = TypeVar("T")
U = TypeVar("U")

log = get_logger(__name__)


def page_offset(page_number: int, page_size: int) -> int:
    return (page_number - 1) * page_size


def count_pages(total_count: int, page_size: int) -> int:
    """Ceiling of total_count / page_size, in integers."""
    return -(-total_count // page_size)


def check_page_bounds(page_number: int, page_size: int) -> None:
    """Raise InvalidPagingError unless page_size >= 1 and page_number >= 1."""
    if page_size < 1:
        raise InvalidPagingError(
            "page_size must be at least 1",
            details={"page_size": page_size},
        )
    if page_number < 1:
        raise InvalidPagingError(
            "page_number must be at least 1",
            details={"page_number": page_number},
        )


async def gather_or_cancel(*aws: Awaitable[Any]) -> list[Any]:
    """Await all of aws together. If one fails or we are cancelled, cancel the
    rest and wait for them before re-raising, so no read outlives the call."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class PagingRequest(BaseModel):
    """Requested page, page size and optional sort.

    ``page_size`` is capped at ``Settings.max_page_size`` whenever it is set.
    There is no lower bound here; non-positive sizes are rejected when a
    ``PagedResult`` is built from the request.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    page_number: int = 1
    page_size: int = Field(
        default_factory=lambda: get_settings().default_page_size,
        validate_default=True,
    )
    sort_by: str | None = None
    sort_descending: bool = False

    @field_validator("page_size")
    @classmethod
    def cap_page_size(cls, v: int) -> int:
        max_page_size = get_settings().max_page_size
        if v > max_page_size:
            log.debug("page_size_clamped", requested=v, max_page_size=max_page_size)
            return max_page_size
        return v

    @property
    def offset(self) -> int:
        return page_offset(self.page_number, self.page_size)

    @property
    def sort_key(self) -> str | None:
        """Sort key in "-field" / "+field" form, None when unsorted."""
        if not self.sort_by:
            return None
        return ("-" if self.sort_descending else "+") + self.sort_by


def apply_sort(source: Any, request: PagingRequest) -> Any:
    key = request.sort_key
    if key is None:
        return source
    sort = getattr(source, "sort", None)
    if sort is None:
        raise InvalidPagingError(
            "Source does not support sorting",
            details={"sort_by": request.sort_by},
        )
    return sort(key)


class PagedResult(BaseModel, Generic[T]):
    """One materialized page plus the metadata of the whole result set."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        arbitrary_types_allowed=True,
    )

    items: tuple[T, ...]
    current_page: int = Field(ge=1)
    page_size: int = Field(ge=1)
    total_count: int = Field(ge=0)

    @computed_field(alias="totalPages")
    @property
    def total_pages(self) -> int:
        return count_pages(self.total_count, self.page_size)

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[T]:  # type: ignore[override]
        return iter(self.items)

    def __getitem__(self, index: int | slice) -> "T | tuple[T, ...]":
        return self.items[index]

    def map(self, func: Callable[[T], U]) -> "PagedResult[U]":
        """Transform items, keeping the paging metadata."""
        return PagedResult(
            items=tuple(func(item) for item in self.items),
            current_page=self.current_page,
            page_size=self.page_size,
            total_count=self.total_count,
        )

    @classmethod
    def empty(cls, page_number: int = 1, page_size: int | None = None) -> "PagedResult[T]":
        if page_size is None:
            page_size = get_settings().default_page_size
        check_page_bounds(page_number, page_size)
        return cls(items=(), current_page=page_number, page_size=page_size, total_count=0)

    @classmethod
    def create(cls, source: Query[T], page_number: int, page_size: int) -> "PagedResult[T]":
        """Count the source, then read the requested window from it."""
        check_page_bounds(page_number, page_size)
        with paging_context(page_number, page_size):
            total_count = source.count()
            items = source.skip(page_offset(page_number, page_size)).limit(page_size).to_list()
            log.debug("page_fetched", total_count=total_count, returned=len(items))
        return cls(items=items, current_page=page_number, page_size=page_size, total_count=total_count)

    @classmethod
    async def create_async(
        cls,
        source: AsyncQuery[T],
        page_number: int,
        page_size: int,
        *,
        concurrent: bool | None = None,
    ) -> "PagedResult[T]":
        """Async form of create.

        Cancelling the calling task raises ``asyncio.CancelledError``; no
        partial page is returned. With ``concurrent`` (default from
        ``Settings.concurrent_fetch``) count and window are awaited together,
        which requires ``skip``/``limit`` to leave ``source`` itself untouched.
        If either read fails, the other is cancelled before the error surfaces.
        """
        check_page_bounds(page_number, page_size)
        if concurrent is None:
            concurrent = get_settings().concurrent_fetch
        offset = page_offset(page_number, page_size)
        with paging_context(page_number, page_size):
            try:
                if concurrent:
                    total_count, items = await gather_or_cancel(
                        source.count(),
                        source.skip(offset).limit(page_size).to_list(),
                    )
                else:
                    total_count = await source.count()
                    items = await source.skip(offset).limit(page_size).to_list()
            except asyncio.CancelledError:
                log.info("page_fetch_cancelled")
                raise
            log.debug("page_fetched", total_count=total_count, returned=len(items), concurrent=concurrent)
        return cls(items=items, current_page=page_number, page_size=page_size, total_count=total_count)

    @classmethod
    def from_request(cls, source: Query[T], request: PagingRequest) -> "PagedResult[T]":
        return cls.create(apply_sort(source, request), request.page_number, request.page_size)

    @classmethod
    async def from_request_async(
        cls,
        source: AsyncQuery[T],
        request: PagingRequest,
        *,
        concurrent: bool | None = None,
    ) -> "PagedResult[T]":
        return await cls.create_async(
            apply_sort(source, request),
            request.page_number,
            request.page_size,
            concurrent=concurrent,
        )
