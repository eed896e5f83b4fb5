"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Protocol

Record = dict[str, Any]


class ConfirmResult(Enum):
    """
    Result of a registration confirmation attempt.

    Exactly one outcome is produced per call:
    - SUCCESS: account confirmed, token deleted
    - INVALID_TOKEN: no stored token matches (never issued or already consumed)
    - EXPIRED: token found but past its expiration date (not deleted)
    - ALREADY_CONFIRMED: owning account was confirmed before
    """

    SUCCESS = "success"
    INVALID_TOKEN = "invalid_token"
    EXPIRED = "expired"
    ALREADY_CONFIRMED = "already_confirmed"


class ResendResult(Enum):
    """Result of a confirmation email resend."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ALREADY_CONFIRMED = "already_confirmed"


@dataclass(frozen=True)
class Filter:
    """
    Record filter understood by every Collection adapter.

    - equals: field == value, all AND-ed together
    - contains_any: case-insensitive substring matches, OR-ed together;
      an empty mapping places no constraint
    """

    equals: dict[str, Any] = field(default_factory=dict)
    contains_any: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Sort:
    field: str
    direction: Literal["asc", "desc"] = "desc"


@dataclass(frozen=True)
class UpdateResult:
    matched_count: int
    modified_count: int


class Collection(Protocol):
    """Port interface for a persisted collection of records."""

    def find(
        self,
        filter: Filter,
        sort: Sort | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Record]:
        """
        Find records matching filter.

        Args:
            filter: Record filter
            sort: Single-key sort, ties broken by id ascending
            skip: Number of matching records to skip
            limit: Maximum number of records, None for unbounded

        Returns:
            Matching records including their "id" key
        """
        ...

    def find_one(self, filter: Filter) -> Record | None: ...

    def count(self, filter: Filter) -> int: ...

    def insert(self, record: Record) -> str:
        """
        Insert a record and return its generated id.

        Raises:
            DuplicateRecord: If a unique field already holds the value
        """
        ...

    def find_by_id(self, id: str) -> Record | None: ...

    def update_by_id(self, id: str, patch: Record) -> UpdateResult: ...

    def update_where(self, filter: Filter, patch: Record) -> UpdateResult:
        """
        Apply patch to every record matching filter in one atomic step.

        Used for conditional transitions: a filter that includes the
        expected current value makes the update a compare-and-set.
        """
        ...

    def delete_by_id(self, id: str) -> int: ...

    def delete_where(self, filter: Filter) -> int: ...

    def clear(self) -> None: ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send(self, to: str, subject: str, text: str, html: str | None = None) -> bool:
        """
        Deliver an email.

        Args:
            to: Recipient address
            subject: Subject line
            text: Plain-text body
            html: Optional HTML body

        Returns:
            True if the message was handed over for delivery
        """
        ...


class TokenSigner(Protocol):
    """Port interface for access token signing."""

    def sign(self, user_id: str) -> str: ...

    def verify(self, token: str) -> str | None:
        """Return the user id carried by a valid token, None otherwise."""
        ...
