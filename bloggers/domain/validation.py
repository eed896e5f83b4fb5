"""
Resource validators - Input schemas and field error translation.

Each input shape is a pydantic model: strings are trimmed before any
constraint runs, unknown fields are dropped, and every field is checked
(no fail-fast). Pydantic error types are translated into per-field
messages and deduplicated so the first error per field wins.
"""

import re
from collections.abc import Mapping
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from .models import FieldError, dedupe_errors

WEBSITE_URL_PATTERN = r"^https://([a-zA-Z0-9_-]+\.)+[a-zA-Z0-9_-]+(/[a-zA-Z0-9_-]+)*/?$"
EMAIL_PATTERN = r"^[A-Za-z0-9_.-]+@([A-Za-z0-9_-]+\.)+[A-Za-z0-9_-]{2,4}$"
LOGIN_PATTERN = r"^[a-zA-Z0-9_-]*$"
LOGIN_MIN_LENGTH = 3
LOGIN_MAX_LENGTH = 10

_EMAIL_RE = re.compile(EMAIL_PATTERN)
_LOGIN_RE = re.compile(LOGIN_PATTERN)

# Pseudo error type for a string that is empty once trimmed
EMPTY = "empty"

M = TypeVar("M", bound="InputSchema")


def field_messages(
    name: str,
    *,
    min_length: int | None = None,
    max_length: int | None = None,
    pattern_message: str | None = None,
) -> dict[str, str]:
    """Build the error-type -> message table for one field."""
    messages = {
        "missing": f"{name} is required",
        "string_type": f"{name} must be a string",
        EMPTY: f"empty string can't be used as a {name}",
        "string_pattern_mismatch": pattern_message or f"{name} has an incorrect format",
    }
    if min_length is not None and min_length > 1:
        messages["string_too_short"] = f"{name} can't be shorter than {min_length} characters"
    else:
        messages["string_too_short"] = messages[EMPTY]
    if max_length is not None:
        messages["string_too_long"] = f"{name} can't be longer than {max_length} characters"
    return messages


class InputSchema(BaseModel):
    """Base for request body schemas."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        extra="ignore",
        regex_engine="python-re",
        populate_by_name=True,
    )

    messages: ClassVar[dict[str, dict[str, str]]] = {}


class BlogInput(InputSchema):
    name: str = Field(min_length=1, max_length=15)
    description: str = Field(min_length=1, max_length=500)
    website_url: str = Field(
        alias="websiteUrl", min_length=1, max_length=100, pattern=WEBSITE_URL_PATTERN
    )

    messages: ClassVar[dict[str, dict[str, str]]] = {
        "name": field_messages("name", max_length=15),
        "description": field_messages("description", max_length=500),
        "websiteUrl": field_messages("websiteUrl", max_length=100, pattern_message="incorrect url"),
    }


class BlogPostInput(InputSchema):
    """Post fields when the blog comes from the path."""

    title: str = Field(min_length=1, max_length=30)
    short_description: str = Field(alias="shortDescription", min_length=1, max_length=100)
    content: str = Field(min_length=1, max_length=1000)

    messages: ClassVar[dict[str, dict[str, str]]] = {
        "title": field_messages("title", max_length=30),
        "shortDescription": field_messages("shortDescription", max_length=100),
        "content": field_messages("content", max_length=1000),
    }


class PostInput(BlogPostInput):
    blog_id: str = Field(alias="blogId", min_length=1)

    messages: ClassVar[dict[str, dict[str, str]]] = {
        **BlogPostInput.messages,
        "blogId": field_messages("blogId"),
    }


class CommentInput(InputSchema):
    content: str = Field(min_length=20, max_length=300)

    messages: ClassVar[dict[str, dict[str, str]]] = {
        "content": field_messages("content", min_length=20, max_length=300),
    }


class UserInput(InputSchema):
    email: str = Field(min_length=1, pattern=EMAIL_PATTERN)
    login: str = Field(min_length=LOGIN_MIN_LENGTH, max_length=LOGIN_MAX_LENGTH, pattern=LOGIN_PATTERN)
    password: str = Field(min_length=6, max_length=20)

    messages: ClassVar[dict[str, dict[str, str]]] = {
        "email": field_messages("email", pattern_message="email must match the email pattern"),
        "login": field_messages(
            "login",
            min_length=LOGIN_MIN_LENGTH,
            max_length=LOGIN_MAX_LENGTH,
            pattern_message="login must match the login pattern",
        ),
        "password": field_messages("password", min_length=6, max_length=20),
    }


class LoginInput(InputSchema):
    login_or_email: str = Field(alias="loginOrEmail", min_length=1)
    password: str = Field(min_length=6, max_length=20)

    messages: ClassVar[dict[str, dict[str, str]]] = {
        "loginOrEmail": {
            **field_messages("loginOrEmail"),
            "login_or_email": "loginOrEmail must be a valid login or email",
        },
        "password": field_messages("password", min_length=6, max_length=20),
    }

    @field_validator("login_or_email")
    @classmethod
    def _check_login_or_email(cls, value: str) -> str:
        if classify_credential(value) is None:
            raise PydanticCustomError("login_or_email", "loginOrEmail must be a valid login or email")
        return value

    @property
    def lookup_field(self) -> str:
        """Stored field the credential refers to: "email" or "login"."""
        return classify_credential(self.login_or_email) or "login"


class ResendInput(InputSchema):
    email: str = Field(min_length=1, pattern=EMAIL_PATTERN)

    messages: ClassVar[dict[str, dict[str, str]]] = {
        "email": field_messages("email", pattern_message="email must match the email pattern"),
    }


class ConfirmationInput(InputSchema):
    code: str = Field(min_length=1)

    messages: ClassVar[dict[str, dict[str, str]]] = {
        "code": field_messages("code"),
    }


def classify_credential(value: str) -> str | None:
    if _EMAIL_RE.match(value):
        return "email"
    if LOGIN_MIN_LENGTH <= len(value) <= LOGIN_MAX_LENGTH and _LOGIN_RE.match(value):
        return "login"
    return None


def translate_errors(schema: type[InputSchema], exc: ValidationError) -> list[FieldError]:
    """Map pydantic errors to FieldErrors using the schema's message table."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        kind = error["type"]
        value = error.get("input")
        if kind == "string_too_short" and isinstance(value, str) and not value.strip():
            kind = EMPTY
        message = schema.messages.get(field, {}).get(kind, error["msg"])
        errors.append(FieldError(field=field, message=message))
    return errors


def validate_input(schema: type[M], payload: Any) -> tuple[M | None, list[FieldError]]:
    """
    Validate a request body against a schema.

    Never raises: a non-object payload is treated as an empty object, so
    every required field reports as missing.

    Returns:
        (validated model, []) on success, (None, deduplicated errors) otherwise
    """
    if not isinstance(payload, Mapping):
        payload = {}
    try:
        return schema.model_validate(payload), []
    except ValidationError as exc:
        return None, dedupe_errors(translate_errors(schema, exc))
