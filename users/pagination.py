"""Stable offset/limit paging over relation sets and user lists."""

from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Iterable, List, Sequence, Tuple

from django.conf import settings
from django.db.models import QuerySet

from users.exceptions import InvalidPaginationError


@dataclass(frozen=True)
class EdgePage:
    """One page of items plus the size of the whole set."""
    items: List[Any]
    total_count: int
    offset: int
    limit: int


def _non_negative(value, name):
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidPaginationError(f"{name} must be a non-negative integer.")
    return value


def paginate(edges: Iterable, *, offset: int, limit: int, order_by: Sequence[str] = ("id",)) -> EdgePage:
    """
    Slice `edges` into a page after imposing a deterministic order.

    Edges are ordered by their creation sequence (`id`) unless `order_by`
    says otherwise, so repeated reads of an unchanged set return the same
    pages. Querysets are counted and sliced in the database; any other
    iterable is sorted in memory.
    """
    _non_negative(offset, "offset")
    _non_negative(limit, "limit")

    if isinstance(edges, QuerySet):
        ordered = edges.order_by(*order_by)
        total = ordered.count()
        items = list(ordered[offset:offset + limit]) if offset < total else []
    else:
        ordered = sorted(edges, key=attrgetter(*order_by))
        total = len(ordered)
        items = ordered[offset:offset + limit]
    return EdgePage(items=items, total_count=total, offset=offset, limit=limit)


def _query_int(request, name, default):
    raw = request.query_params.get(name)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidPaginationError(f"{name} must be a non-negative integer.") from exc


def page_params(request) -> Tuple[int, int, int]:
    """
    Read `offset` (zero-based page index) and `number` (page size) from the query.

    Returns (page_index, page_size, item_offset). The page size defaults to
    FOLLOW_PAGE_SIZE and is capped at FOLLOW_PAGE_SIZE_MAX.
    """
    page_index = _non_negative(_query_int(request, "offset", 0), "offset")
    page_size = _non_negative(_query_int(request, "number", settings.FOLLOW_PAGE_SIZE), "number")
    page_size = min(page_size, settings.FOLLOW_PAGE_SIZE_MAX)
    return page_index, page_size, page_index * page_size
