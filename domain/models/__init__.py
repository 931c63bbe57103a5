"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    build_engine,
    init_database,
)
from domain.models.user import AppUser, AuthSession
from domain.models.food_purchase import FoodPurchase

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "build_engine",
    "init_database",
    # User models
    "AppUser",
    "AuthSession",
    # Ledger models
    "FoodPurchase",
]
