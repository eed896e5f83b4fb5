"""
API response models.

Pydantic models describing response bodies for OpenAPI schema generation.
Handlers render domain views directly; these models document them.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class FieldErrorModel(BaseModel):
    message: str
    field: str


class APIErrorResult(BaseModel):
    """Standard error response model."""

    errorsMessages: list[FieldErrorModel]


class Paginator(BaseModel, Generic[T]):
    pagesCount: int | None
    page: int
    pageSize: int
    totalCount: int
    items: list[T]


class BlogView(BaseModel):
    id: str
    name: str
    description: str
    websiteUrl: str
    createdAt: str
    isMembership: bool


class PostView(BaseModel):
    id: str
    title: str
    shortDescription: str
    content: str
    blogId: str
    blogName: str
    createdAt: str


class CommentatorInfo(BaseModel):
    userId: str
    userLogin: str


class CommentView(BaseModel):
    id: str
    content: str
    commentatorInfo: CommentatorInfo
    createdAt: str


class UserView(BaseModel):
    id: str
    login: str
    email: str
    createdAt: str


class LoginSuccess(BaseModel):
    accessToken: str


class MeView(BaseModel):
    email: str
    login: str
    userId: str


BAD_REQUEST = {400: {"model": APIErrorResult, "description": "Validation error"}}
UNAUTHORIZED = {401: {"description": "Missing or invalid credentials"}}
FORBIDDEN = {403: {"description": "Not the owner"}}
NOT_FOUND = {404: {"description": "Not found"}}
