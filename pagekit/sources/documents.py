"""Paging for Beanie documents."""

from typing import Any, TypeVar

from beanie import Document

from pagekit.core.pagination import PagedResult, PagingRequest

DocType = TypeVar("DocType", bound=Document)


async def paginate_documents(
    document: type[DocType],
    *filters: Any,
    request: PagingRequest,
    fetch_links: bool = False,
) -> "PagedResult[DocType]":
    """Page ``document.find(*filters)`` according to ``request``."""
    query = document.find(*filters, fetch_links=fetch_links)
    # FindMany.skip/limit mutate the query, so the count has to run first
    return await PagedResult.from_request_async(query, request, concurrent=False)
