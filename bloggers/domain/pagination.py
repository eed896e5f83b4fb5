"""Paginator - wraps a result window with page metadata."""

import math
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar

from .models import Page, QuerySpec
from .ports import Collection, Filter
from .query import sort_for

T = TypeVar("T")


def pages_count(total_count: int, page_size: int) -> int | None:
    """ceil(total_count / page_size); None when page_size is zero."""
    if page_size == 0:
        return None
    return math.ceil(total_count / page_size)


def paginate(spec: QuerySpec, total_count: int, items: Sequence[T]) -> Page[T]:
    return Page(
        pages_count=pages_count(total_count, spec.page_size),
        page=spec.page_number,
        page_size=spec.page_size,
        total_count=total_count,
        items=list(items),
    )


def fetch_page(
    collection: Collection,
    spec: QuerySpec,
    filter: Filter,
    sort_fields: Mapping[str, str],
    factory: Callable[..., T],
) -> Page[T]:
    """Count, fetch one window of records and wrap them as entities."""
    total_count = collection.count(filter)
    records: list[dict[str, Any]] = collection.find(
        filter, sort_for(spec, sort_fields), spec.skip, spec.limit
    )
    return paginate(spec, total_count, [factory(**record) for record in records])
