from pagekit.core.exceptions import AppError, BadRequestError, InvalidPagingError
from pagekit.core.pagination import PagedResult, PagingRequest
from pagekit.sources.base import AsyncQuery, Query, SortableQuery
from pagekit.sources.memory import AsyncSequenceQuery, SequenceQuery

__all__ = [
    "AppError",
    "BadRequestError",
    "InvalidPagingError",
    "PagedResult",
    "PagingRequest",
    "Query",
    "AsyncQuery",
    "SortableQuery",
    "SequenceQuery",
    "AsyncSequenceQuery",
]
