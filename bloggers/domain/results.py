"""
Service results - Explicit tagged outcomes for resource operations.

Every service operation returns either Ok (status code with a body) or
Status (bare status code). Route handlers render both with one function.
"""

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from .models import ApiErrorResult, FieldError


@dataclass(frozen=True)
class Ok:
    status_code: int
    body: Any


@dataclass(frozen=True)
class Status:
    status_code: int


Result = Ok | Status


def bad_request(errors: list[FieldError]) -> Ok:
    return Ok(HTTPStatus.BAD_REQUEST, ApiErrorResult(errors).to_view())


NOT_FOUND = Status(HTTPStatus.NOT_FOUND)
NO_CONTENT = Status(HTTPStatus.NO_CONTENT)
UNAUTHORIZED = Status(HTTPStatus.UNAUTHORIZED)
FORBIDDEN = Status(HTTPStatus.FORBIDDEN)
