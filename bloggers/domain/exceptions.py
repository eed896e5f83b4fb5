"""
Domain exceptions - Semantic error types for the platform.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""


class BloggersError(Exception):
    """Base class for platform domain errors."""

    pass


class DuplicateRecord(BloggersError):
    """A unique field (login, email, token) already holds the given value."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Duplicate value for {field}")
        self.field = field


class StorageError(BloggersError):
    """Storage could not be prepared (migrations, connectivity)."""

    pass
