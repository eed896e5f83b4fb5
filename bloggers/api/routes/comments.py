"""Comment routes. Changes are restricted to the comment's author."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from bloggers.api.dependencies import get_comment_service, get_current_user
from bloggers.api.models import BAD_REQUEST, FORBIDDEN, NOT_FOUND, UNAUTHORIZED, CommentView
from bloggers.api.responses import render
from bloggers.domain.comments import CommentService
from bloggers.domain.models import CurrentUser

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("/{id}", responses={200: {"model": CommentView}, **NOT_FOUND}, summary="Get a comment")
def get_comment(id: str, service: CommentService = Depends(get_comment_service)) -> Response:
    return render(service.get_comment(id))


@router.put(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**BAD_REQUEST, **UNAUTHORIZED, **FORBIDDEN, **NOT_FOUND},
    summary="Update own comment",
)
def update_comment(
    id: str,
    payload: Any = Body(default=None),
    user: CurrentUser = Depends(get_current_user),
    service: CommentService = Depends(get_comment_service),
) -> Response:
    return render(service.update_comment(user, id, payload))


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**UNAUTHORIZED, **FORBIDDEN, **NOT_FOUND},
    summary="Delete own comment",
)
def delete_comment(
    id: str,
    user: CurrentUser = Depends(get_current_user),
    service: CommentService = Depends(get_comment_service),
) -> Response:
    return render(service.delete_comment(user, id))
