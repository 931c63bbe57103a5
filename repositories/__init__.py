"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.user_repository import UserRepository, AuthSessionRepository
from repositories.meal_record_repository import MealRecordRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "AuthSessionRepository",
    "MealRecordRepository",
]
