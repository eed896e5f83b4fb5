"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes, plus the two
authentication gates (admin basic auth and user bearer tokens).
"""

from collections.abc import Callable
from datetime import datetime, timedelta

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import (
    HTTPAuthorizationCredentials,
    HTTPBasic,
    HTTPBasicCredentials,
    HTTPBearer,
)

from bloggers.adapters.repository import Storage
from bloggers.config.settings import Settings
from bloggers.domain.auth import AuthService
from bloggers.domain.authentication import Authenticator
from bloggers.domain.blogs import BlogService
from bloggers.domain.comments import CommentService
from bloggers.domain.models import CurrentUser
from bloggers.domain.ports import EmailSender, TokenSigner
from bloggers.domain.posts import PostService
from bloggers.domain.registration import RegistrationService
from bloggers.domain.users import UserService


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_storage(request: Request) -> Storage:
    """
    Get storage handle from app state.

    The handle is opened during app lifespan startup and stored in app.state.
    """
    return request.app.state.storage


def get_email_sender(request: Request) -> EmailSender:
    return request.app.state.email_sender


def get_token_signer(request: Request) -> TokenSigner:
    return request.app.state.token_signer


def get_clock(request: Request) -> Callable[[], datetime]:
    return request.app.state.clock


def get_blog_service(
    storage: Storage = Depends(get_storage),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> BlogService:
    return BlogService(blogs=storage.blogs, clock=clock)


def get_post_service(
    storage: Storage = Depends(get_storage),
    blogs: BlogService = Depends(get_blog_service),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> PostService:
    return PostService(posts=storage.posts, blogs=blogs, clock=clock)


def get_comment_service(
    storage: Storage = Depends(get_storage),
    posts: PostService = Depends(get_post_service),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> CommentService:
    return CommentService(comments=storage.comments, posts=posts, clock=clock)


def get_user_service(
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> UserService:
    return UserService(users=storage.users, bcrypt_cost=settings.bcrypt_cost, clock=clock)


def get_registration_service(
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
    email_sender: EmailSender = Depends(get_email_sender),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the user and token collections and the email sender.
    """
    return RegistrationService(
        users=storage.users,
        tokens=storage.tokens,
        email_sender=email_sender,
        confirmation_url=settings.confirmation_url,
        ttl=timedelta(seconds=settings.confirmation_ttl_seconds),
        bcrypt_cost=settings.bcrypt_cost,
        clock=clock,
    )


def get_auth_service(
    storage: Storage = Depends(get_storage),
    signer: TokenSigner = Depends(get_token_signer),
    registration: RegistrationService = Depends(get_registration_service),
) -> AuthService:
    return AuthService(users=storage.users, signer=signer, registration=registration)


def get_authenticator(
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
    signer: TokenSigner = Depends(get_token_signer),
) -> Authenticator:
    return Authenticator(
        users=storage.users,
        signer=signer,
        admin_username=settings.admin_username,
        admin_password=settings.admin_password,
    )


# Security schemes for OpenAPI documentation. auto_error is off so that
# every failure goes through the same 401 below.
http_basic = HTTPBasic(auto_error=False)
http_bearer = HTTPBearer(auto_error=False)


def require_admin(
    credentials: HTTPBasicCredentials | None = Depends(http_basic),
    authenticator: Authenticator = Depends(get_authenticator),
) -> None:
    """
    Guard admin-only routes with HTTP BASIC AUTH.

    FastAPI's HTTPBasic rejects malformed base64 with 401 on its own;
    a missing header or a wrong pair is rejected here.
    """
    if credentials is None or not authenticator.is_admin(
        credentials.username, credentials.password
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Basic"},
        )


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    authenticator: Authenticator = Depends(get_authenticator),
) -> CurrentUser:
    """Resolve the bearer token to the calling user, 401 otherwise."""
    user = None
    if credentials is not None:
        user = authenticator.resolve_bearer(credentials.credentials)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
