"""Post routes, with the comments nested under a post."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response, status

from bloggers.api.dependencies import (
    get_comment_service,
    get_current_user,
    get_post_service,
    require_admin,
)
from bloggers.api.models import (
    BAD_REQUEST,
    NOT_FOUND,
    UNAUTHORIZED,
    CommentView,
    Paginator,
    PostView,
)
from bloggers.api.responses import render
from bloggers.domain.comments import CommentService
from bloggers.domain.models import CurrentUser
from bloggers.domain.posts import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", responses={200: {"model": Paginator[PostView]}}, summary="List posts")
def list_posts(request: Request, service: PostService = Depends(get_post_service)) -> Response:
    return render(service.list_posts(dict(request.query_params)))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    responses={201: {"model": PostView}, **BAD_REQUEST, **UNAUTHORIZED},
    summary="Create a post",
    description="blogId must reference an existing blog.",
)
def create_post(
    payload: Any = Body(default=None),
    service: PostService = Depends(get_post_service),
) -> Response:
    return render(service.create_post(payload))


@router.get("/{id}", responses={200: {"model": PostView}, **NOT_FOUND}, summary="Get a post")
def get_post(id: str, service: PostService = Depends(get_post_service)) -> Response:
    return render(service.get_post(id))


@router.put(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
    responses={**BAD_REQUEST, **UNAUTHORIZED, **NOT_FOUND},
    summary="Update a post",
)
def update_post(
    id: str,
    payload: Any = Body(default=None),
    service: PostService = Depends(get_post_service),
) -> Response:
    return render(service.update_post(id, payload))


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
    responses={**UNAUTHORIZED, **NOT_FOUND},
    summary="Delete a post",
)
def delete_post(id: str, service: PostService = Depends(get_post_service)) -> Response:
    return render(service.delete_post(id))


@router.get(
    "/{id}/comments",
    responses={200: {"model": Paginator[CommentView]}, **NOT_FOUND},
    summary="List comments of a post",
)
def list_post_comments(
    id: str,
    request: Request,
    service: CommentService = Depends(get_comment_service),
) -> Response:
    return render(service.list_comments_of_post(id, dict(request.query_params)))


@router.post(
    "/{id}/comments",
    status_code=status.HTTP_201_CREATED,
    responses={201: {"model": CommentView}, **BAD_REQUEST, **UNAUTHORIZED, **NOT_FOUND},
    summary="Comment on a post",
)
def create_post_comment(
    id: str,
    payload: Any = Body(default=None),
    user: CurrentUser = Depends(get_current_user),
    service: CommentService = Depends(get_comment_service),
) -> Response:
    return render(service.create_comment(user, id, payload))
