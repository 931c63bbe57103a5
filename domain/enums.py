"""
Domain enums for MealLedger application.
Contains all enumeration types used across the domain models.
"""

import enum


class MealSlot(str, enum.Enum):
    """The two fixed daily purchase flags"""

    BREAKFAST = "breakfast"
    DINNER = "dinner"


class ToggleStatus(str, enum.Enum):
    """Lifecycle of an optimistic toggle"""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"
