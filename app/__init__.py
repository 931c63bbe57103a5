"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import settings
from app.exceptions import (
    ServiceValidationError,
    InvalidRangeError,
    NotFoundError,
    ConflictError,
    UnauthorizedError,
    UnauthenticatedError,
    StoreError,
    StoreUnavailableError,
    FetchFailedError,
    InsertFailedError,
    UpdateFailedError,
    DeleteFailedError,
)

__all__ = [
    "settings",
    "ServiceValidationError",
    "InvalidRangeError",
    "NotFoundError",
    "ConflictError",
    "UnauthorizedError",
    "UnauthenticatedError",
    "StoreError",
    "StoreUnavailableError",
    "FetchFailedError",
    "InsertFailedError",
    "UpdateFailedError",
    "DeleteFailedError",
]
