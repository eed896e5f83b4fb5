"""
Blog routes.

Listing and reading are public; writes require admin basic auth. Posts
nested under a blog live here too.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response, status

from bloggers.api.dependencies import get_blog_service, get_post_service, require_admin
from bloggers.api.models import (
    BAD_REQUEST,
    NOT_FOUND,
    UNAUTHORIZED,
    BlogView,
    Paginator,
    PostView,
)
from bloggers.api.responses import render
from bloggers.domain.blogs import BlogService
from bloggers.domain.posts import PostService

router = APIRouter(prefix="/blogs", tags=["blogs"])


@router.get(
    "",
    responses={200: {"model": Paginator[BlogView]}},
    summary="List blogs",
    description="Paged listing; searchNameTerm filters names case-insensitively.",
)
def list_blogs(request: Request, service: BlogService = Depends(get_blog_service)) -> Response:
    return render(service.list_blogs(dict(request.query_params)))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    responses={201: {"model": BlogView}, **BAD_REQUEST, **UNAUTHORIZED},
    summary="Create a blog",
)
def create_blog(
    payload: Any = Body(default=None),
    service: BlogService = Depends(get_blog_service),
) -> Response:
    return render(service.create_blog(payload))


@router.get("/{id}", responses={200: {"model": BlogView}, **NOT_FOUND}, summary="Get a blog")
def get_blog(id: str, service: BlogService = Depends(get_blog_service)) -> Response:
    return render(service.get_blog(id))


@router.put(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
    responses={**BAD_REQUEST, **UNAUTHORIZED, **NOT_FOUND},
    summary="Update a blog",
)
def update_blog(
    id: str,
    payload: Any = Body(default=None),
    service: BlogService = Depends(get_blog_service),
) -> Response:
    return render(service.update_blog(id, payload))


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
    responses={**UNAUTHORIZED, **NOT_FOUND},
    summary="Delete a blog",
)
def delete_blog(id: str, service: BlogService = Depends(get_blog_service)) -> Response:
    return render(service.delete_blog(id))


@router.get(
    "/{id}/posts",
    responses={200: {"model": Paginator[PostView]}, **NOT_FOUND},
    summary="List posts of a blog",
)
def list_blog_posts(
    id: str,
    request: Request,
    service: PostService = Depends(get_post_service),
) -> Response:
    return render(service.list_posts_of_blog(id, dict(request.query_params)))


@router.post(
    "/{id}/posts",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    responses={201: {"model": PostView}, **BAD_REQUEST, **UNAUTHORIZED, **NOT_FOUND},
    summary="Create a post in a blog",
)
def create_blog_post(
    id: str,
    payload: Any = Body(default=None),
    service: PostService = Depends(get_post_service),
) -> Response:
    return render(service.create_post_of_blog(id, payload))
