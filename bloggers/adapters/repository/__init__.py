"""Repository adapters - Storage handle and its database implementations."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from psycopg_pool import ConnectionPool

from bloggers.config.settings import Settings
from bloggers.domain.ports import Collection

from .memory import InMemoryCollection, InMemoryStore
from .postgres import PostgresCollection, run_migrations

logger = logging.getLogger(__name__)

TABLES = {
    "blogs": ("name", "description", "website_url", "created_at", "is_membership"),
    "posts": ("title", "short_description", "content", "blog_id", "blog_name", "created_at"),
    "comments": (
        "post_id",
        "content",
        "commentator_user_id",
        "commentator_user_login",
        "created_at",
    ),
    "users": (
        "login",
        "email",
        "password_salt",
        "password_hash",
        "is_confirmed",
        "created_at",
    ),
    "confirmation_tokens": ("user_id", "token", "expiration_date"),
}

UNIQUE_FIELDS = {
    "users": ("login", "email"),
    "confirmation_tokens": ("token",),
}


@dataclass
class Storage:
    """
    Persistence handle shared by all requests.

    Opened once at startup, injected into services, closed at shutdown.
    """

    blogs: Collection
    posts: Collection
    comments: Collection
    users: Collection
    tokens: Collection
    closer: Callable[[], None]

    def clear_all(self) -> None:
        for collection in (self.blogs, self.posts, self.comments, self.users, self.tokens):
            collection.clear()

    def close(self) -> None:
        self.closer()


def open_memory_storage() -> Storage:
    store = InMemoryStore()
    collections = {name: store.collection(name, UNIQUE_FIELDS.get(name, ())) for name in TABLES}
    return Storage(
        blogs=collections["blogs"],
        posts=collections["posts"],
        comments=collections["comments"],
        users=collections["users"],
        tokens=collections["confirmation_tokens"],
        closer=store.close,
    )


def open_postgres_storage(settings: Settings) -> Storage:
    """Create the connection pool, run migrations and build collections."""
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=True,
    )

    logger.info("Running database migrations...")
    run_migrations(pool)

    def collection(name: str) -> PostgresCollection:
        return PostgresCollection(pool, name, TABLES[name])

    return Storage(
        blogs=collection("blogs"),
        posts=collection("posts"),
        comments=collection("comments"),
        users=collection("users"),
        tokens=collection("confirmation_tokens"),
        closer=pool.close,
    )


def open_storage(settings: Settings) -> Storage:
    if settings.storage_backend == "memory":
        logger.info("Using in-memory storage")
        return open_memory_storage()
    logger.info("Connecting to database...")
    return open_postgres_storage(settings)


__all__ = [
    "InMemoryCollection",
    "InMemoryStore",
    "PostgresCollection",
    "Storage",
    "open_memory_storage",
    "open_postgres_storage",
    "open_storage",
    "run_migrations",
]
