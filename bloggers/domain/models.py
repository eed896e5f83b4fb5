"""
Domain models - Entities, value objects and view mapping.

Entities are plain dataclasses whose field names double as the stored
record keys. Each entity knows how to render its public (camelCase) view.
"""

import re
import secrets
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_ID_PATTERN = re.compile(r"^[0-9a-f]{24}$")


def new_id() -> str:
    """
    Generate an ObjectId-shaped identifier.

    4-byte big-endian seconds timestamp followed by 8 random bytes,
    rendered as 24 lowercase hex characters. Ids sort roughly by creation.
    """
    return int(time.time()).to_bytes(4, "big").hex() + secrets.token_hex(8)


def is_valid_id(value: str) -> bool:
    """Check that value is a well-formed identifier (24 lowercase hex chars)."""
    return isinstance(value, str) and _ID_PATTERN.match(value) is not None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render a datetime as ISO-8601 UTC with milliseconds and a Z suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_record(entity: Any) -> dict[str, Any]:
    """Convert an entity to a storable record without its id."""
    record = asdict(entity)
    record.pop("id", None)
    return record


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def to_view(self) -> dict[str, str]:
        return {"message": self.message, "field": self.field}


def dedupe_errors(errors: list[FieldError]) -> list[FieldError]:
    """Keep the first error per field, preserving original order."""
    seen: set[str] = set()
    unique = []
    for error in errors:
        if error.field in seen:
            continue
        seen.add(error.field)
        unique.append(error)
    return unique


@dataclass(frozen=True)
class ApiErrorResult:
    errors: list[FieldError]

    def to_view(self) -> dict[str, Any]:
        return {"errorsMessages": [error.to_view() for error in dedupe_errors(self.errors)]}


@dataclass(frozen=True)
class QuerySpec:
    """Fully-defaulted list query (see bloggers.domain.query)."""

    page_number: int = 1
    page_size: int = 10
    sort_by: str = "createdAt"
    sort_direction: str = "desc"
    search_terms: dict[str, str] = field(default_factory=dict)

    @property
    def skip(self) -> int:
        return max((self.page_number - 1) * self.page_size, 0)

    @property
    def limit(self) -> int | None:
        # A zero page size leaves the result set unbounded
        return self.page_size or None

    def search(self, name: str) -> str:
        return self.search_terms.get(name, "")


@dataclass(frozen=True)
class Page(Generic[T]):
    pages_count: int | None
    page: int
    page_size: int
    total_count: int
    items: list[T]

    def to_view(self) -> dict[str, Any]:
        return {
            "pagesCount": self.pages_count,
            "page": self.page,
            "pageSize": self.page_size,
            "totalCount": self.total_count,
            "items": [item.to_view() for item in self.items],
        }


@dataclass
class Blog:
    id: str
    name: str
    description: str
    website_url: str
    created_at: datetime
    is_membership: bool = False

    def to_view(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "websiteUrl": self.website_url,
            "createdAt": format_timestamp(self.created_at),
            "isMembership": self.is_membership,
        }


@dataclass
class Post:
    id: str
    title: str
    short_description: str
    content: str
    blog_id: str
    blog_name: str
    created_at: datetime

    def to_view(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "shortDescription": self.short_description,
            "content": self.content,
            "blogId": self.blog_id,
            "blogName": self.blog_name,
            "createdAt": format_timestamp(self.created_at),
        }


@dataclass
class Comment:
    id: str
    post_id: str
    content: str
    commentator_user_id: str
    commentator_user_login: str
    created_at: datetime

    def to_view(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "commentatorInfo": {
                "userId": self.commentator_user_id,
                "userLogin": self.commentator_user_login,
            },
            "createdAt": format_timestamp(self.created_at),
        }


@dataclass
class UserAccount:
    id: str
    login: str
    email: str
    password_salt: str
    password_hash: str
    is_confirmed: bool
    created_at: datetime

    def to_view(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "login": self.login,
            "email": self.email,
            "createdAt": format_timestamp(self.created_at),
        }


@dataclass
class ConfirmationToken:
    id: str
    user_id: str
    token: str
    expiration_date: datetime


@dataclass(frozen=True)
class CurrentUser:
    """Identity attached to a request by bearer authentication."""

    id: str
    login: str
    email: str
