"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from bloggers import __version__
from bloggers.adapters.repository import open_storage
from bloggers.adapters.security import JwtTokenSigner
from bloggers.adapters.smtp import ConsoleEmailSender, SmtpEmailSender
from bloggers.api.responses import request_validation_handler
from bloggers.api.routes import router
from bloggers.config.settings import Settings, get_settings
from bloggers.domain.models import utc_now
from bloggers.domain.ports import EmailSender, Filter

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {"name": "blogs", "description": "Blogs and the posts published in them"},
    {"name": "posts", "description": "Posts and their comments"},
    {"name": "comments", "description": "Comments, editable by their authors"},
    {"name": "users", "description": "User administration (admin only)"},
    {"name": "auth", "description": "Login and e-mail confirmed registration"},
    {"name": "testing", "description": "Test support"},
]


def build_email_sender(settings: Settings) -> EmailSender:
    if settings.email_backend == "smtp":
        return SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            sender=settings.email_sender,
        )
    return ConsoleEmailSender()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Opens the storage handle on startup (pool + migrations, or memory)
    - Closes it on shutdown
    """
    settings: Settings = app.state.settings

    logger.info("Starting application...")
    app.state.storage = open_storage(settings)
    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    app.state.storage.close()
    logger.info("Storage closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for the given (or environment) settings."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="bloggers",
        description="Bloggers platform API - blogs, posts, comments and users",
        version=__version__,
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.clock = utc_now
    app.state.email_sender = build_email_sender(settings)
    app.state.token_signer = JwtTokenSigner(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_in=timedelta(minutes=settings.access_token_expire_minutes),
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(router)

    @app.get("/health", tags=["testing"])
    def health_check(request: Request) -> dict[str, str]:
        """
        Health check endpoint with storage validation.

        Returns 200 OK if application and storage are healthy.
        Raises exception if storage is unreachable.
        """
        request.app.state.storage.blogs.count(Filter())
        return {"status": "healthy"}

    return app


app = create_app()
