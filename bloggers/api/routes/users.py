"""User administration routes (admin basic auth)."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response, status

from bloggers.api.dependencies import get_user_service, require_admin
from bloggers.api.models import BAD_REQUEST, NOT_FOUND, UNAUTHORIZED, Paginator, UserView
from bloggers.api.responses import render
from bloggers.domain.users import UserService

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(require_admin)])


@router.get(
    "",
    responses={200: {"model": Paginator[UserView]}, **UNAUTHORIZED},
    summary="List users",
    description="searchLoginTerm and searchEmailTerm are OR-ed substring filters.",
)
def list_users(request: Request, service: UserService = Depends(get_user_service)) -> Response:
    return render(service.list_users(dict(request.query_params)))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={201: {"model": UserView}, **BAD_REQUEST, **UNAUTHORIZED},
    summary="Create a user",
    description="Accounts created here start unconfirmed and receive no email.",
)
def create_user(
    payload: Any = Body(default=None),
    service: UserService = Depends(get_user_service),
) -> Response:
    return render(service.create_user(payload))


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**UNAUTHORIZED, **NOT_FOUND},
    summary="Delete a user",
)
def delete_user(id: str, service: UserService = Depends(get_user_service)) -> Response:
    return render(service.delete_user(id))
