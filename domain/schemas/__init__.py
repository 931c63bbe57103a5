"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.ledger_schemas import (
    MealRecord,
    DateRange,
    LedgerView,
    LedgerSummary,
    RowSummary,
    PendingToggle,
    MealRecordInput,
    ToggleRequest,
    ToggleResponse,
    SummaryResponse,
    LedgerResponse,
    ResetResponse,
)
from domain.schemas.user_schemas import (
    UserCreate,
    LoginRequest,
    UserResponse,
    TokenResponse,
)

__all__ = [
    # Ledger schemas
    "MealRecord",
    "DateRange",
    "LedgerView",
    "LedgerSummary",
    "RowSummary",
    "PendingToggle",
    "MealRecordInput",
    "ToggleRequest",
    "ToggleResponse",
    "SummaryResponse",
    "LedgerResponse",
    "ResetResponse",
    # User schemas
    "UserCreate",
    "LoginRequest",
    "UserResponse",
    "TokenResponse",
]
