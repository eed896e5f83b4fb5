"""
Domain layer - Pure business logic with zero framework imports.

This package contains the query normalizer, paginator, resource
validators, the confirmation token state machine and the resource
services. It defines its own port interfaces for infrastructure
abstraction; adapters implement them.
"""

from .exceptions import BloggersError, DuplicateRecord, StorageError
from .ports import (
    Collection,
    ConfirmResult,
    EmailSender,
    Filter,
    ResendResult,
    Sort,
    TokenSigner,
    UpdateResult,
)
from .registration import RegistrationService
from .results import Ok, Result, Status

__all__ = [
    "BloggersError",
    "Collection",
    "ConfirmResult",
    "DuplicateRecord",
    "EmailSender",
    "Filter",
    "Ok",
    "RegistrationService",
    "ResendResult",
    "Result",
    "Sort",
    "Status",
    "StorageError",
    "TokenSigner",
    "UpdateResult",
]
