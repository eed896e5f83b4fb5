"""
Query normalizer - Pagination and sort parameters for list endpoints.

Turns an untyped query mapping into a fully-defaulted QuerySpec. The
normalizer is total: invalid or missing values fall back to defaults and
nothing is ever raised.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from .models import QuerySpec
from .ports import Sort

DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 10
DEFAULT_SORT_BY = "createdAt"
DEFAULT_SORT_DIRECTION = "desc"
SORT_DIRECTIONS = ("asc", "desc")

# Public sortBy value -> stored record field, per resource.
# Every whitelist contains the createdAt default.
BLOG_SORT_FIELDS = {
    "id": "id",
    "name": "name",
    "description": "description",
    "websiteUrl": "website_url",
    "isMembership": "is_membership",
    "createdAt": "created_at",
}
POST_SORT_FIELDS = {
    "id": "id",
    "title": "title",
    "shortDescription": "short_description",
    "content": "content",
    "blogId": "blog_id",
    "blogName": "blog_name",
    "createdAt": "created_at",
}
COMMENT_SORT_FIELDS = {
    "id": "id",
    "content": "content",
    "createdAt": "created_at",
}
USER_SORT_FIELDS = {
    "id": "id",
    "login": "login",
    "email": "email",
    "createdAt": "created_at",
}

BLOG_SEARCH_TERMS = ("searchNameTerm",)
USER_SEARCH_TERMS = ("searchLoginTerm", "searchEmailTerm")


def parse_page_param(value: Any, default: int) -> int:
    """
    Parse pageNumber / pageSize.

    Falls back to default when the value is missing, is not a clean integer
    literal (its int round-trip differs from the input), or is negative.
    Zero is accepted as-is.
    """
    if value is None:
        return default
    text = str(value)
    try:
        parsed = int(text)
    except ValueError:
        return default
    if str(parsed) != text:
        return default
    if parsed < 0:
        return default
    return parsed


def parse_sort_by(value: Any, allowed: Iterable[str]) -> str:
    return value if isinstance(value, str) and value in allowed else DEFAULT_SORT_BY


def parse_sort_direction(value: Any) -> str:
    return value if isinstance(value, str) and value in SORT_DIRECTIONS else DEFAULT_SORT_DIRECTION


def normalize_query(
    raw: Mapping[str, Any],
    sortable: Iterable[str],
    search_terms: Iterable[str] = (),
) -> QuerySpec:
    """
    Build a QuerySpec from raw query parameters.

    Args:
        raw: Untyped query mapping (e.g. request query string)
        sortable: Whitelist of public sortBy values for the resource
        search_terms: Names of the resource's search parameters

    Returns:
        QuerySpec with every field resolved to a valid value
    """
    terms = {}
    for name in search_terms:
        term = raw.get(name)
        terms[name] = term if isinstance(term, str) else ""

    return QuerySpec(
        page_number=parse_page_param(raw.get("pageNumber"), DEFAULT_PAGE_NUMBER),
        page_size=parse_page_param(raw.get("pageSize"), DEFAULT_PAGE_SIZE),
        sort_by=parse_sort_by(raw.get("sortBy"), sortable),
        sort_direction=parse_sort_direction(raw.get("sortDirection")),
        search_terms=terms,
    )


def sort_for(spec: QuerySpec, fields: Mapping[str, str]) -> Sort:
    """Translate the public sortBy of a QuerySpec into a stored-field Sort."""
    return Sort(field=fields[spec.sort_by], direction=spec.sort_direction)
