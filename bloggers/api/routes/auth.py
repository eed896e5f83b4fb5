"""
Auth routes.

Login, identity of the bearer, and the three steps of e-mail confirmed
registration: register, resend the code, confirm the code.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from bloggers.api.dependencies import get_auth_service, get_current_user
from bloggers.api.models import BAD_REQUEST, UNAUTHORIZED, LoginSuccess, MeView
from bloggers.api.responses import render
from bloggers.domain.auth import AuthService
from bloggers.domain.models import CurrentUser

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    responses={200: {"model": LoginSuccess}, **BAD_REQUEST, **UNAUTHORIZED},
    summary="Log in with login or email",
)
def login(
    payload: Any = Body(default=None),
    service: AuthService = Depends(get_auth_service),
) -> Response:
    return render(service.login(payload))


@router.get("/me", responses={200: {"model": MeView}, **UNAUTHORIZED}, summary="Current user")
def me(
    user: CurrentUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> Response:
    return render(service.me(user))


@router.post(
    "/registration",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=BAD_REQUEST,
    summary="Register a new user",
    description="Creates an unconfirmed account and emails a confirmation code.",
)
def registration(
    payload: Any = Body(default=None),
    service: AuthService = Depends(get_auth_service),
) -> Response:
    return render(service.register(payload))


@router.post(
    "/registration-email-resending",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=BAD_REQUEST,
    summary="Resend the confirmation code",
)
def registration_email_resending(
    payload: Any = Body(default=None),
    service: AuthService = Depends(get_auth_service),
) -> Response:
    return render(service.resend(payload))


@router.post(
    "/registration-confirmation",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=BAD_REQUEST,
    summary="Confirm registration",
)
def registration_confirmation(
    payload: Any = Body(default=None),
    service: AuthService = Depends(get_auth_service),
) -> Response:
    return render(service.confirm(payload))
