"""Shared FastAPI dependencies."""

from fastapi import Query

from pagekit.core.pagination import PagingRequest


def get_paging_request(
    page_number: int = Query(1, alias="pageNumber"),
    page_size: int | None = Query(None, alias="pageSize"),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_descending: bool = Query(False, alias="sortDescending"),
) -> PagingRequest:
    """Dependency: build a PagingRequest from query params (pageSize capped, defaulted from settings)."""
    request = PagingRequest(page_number=page_number, sort_by=sort_by, sort_descending=sort_descending)
    if page_size is not None:
        request.page_size = page_size
    return request
