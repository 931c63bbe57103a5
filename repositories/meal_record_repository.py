"""
Meal Record Repository - Data access layer for food purchase rows
"""

from typing import Dict, List, Optional, Sequence
from uuid import UUID
from datetime import date
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import FoodPurchase

UPDATABLE_FIELDS = ("breakfast", "dinner")


class MealRecordRepository(BaseRepository[FoodPurchase]):
    """Repository for per-day meal rows"""

    def __init__(self, db: Session):
        super().__init__(db, FoodPurchase)

    def get_for_user(
        self, user_id: UUID, record_id: UUID, day: date = None
    ) -> Optional[FoodPurchase]:
        """Get a row by ID, only if it belongs to the user (and falls on ``day``)"""
        query = self.db.query(FoodPurchase).filter(
            FoodPurchase.id == record_id, FoodPurchase.user_id == user_id
        )
        if day is not None:
            query = query.filter(FoodPurchase.date == day)
        return query.first()

    def _range_query(self, user_id: UUID, start: date = None, end: date = None):
        query = self.db.query(FoodPurchase).filter(FoodPurchase.user_id == user_id)
        if start:
            query = query.filter(FoodPurchase.date >= start)
        if end:
            query = query.filter(FoodPurchase.date <= end)
        return query

    def get_by_user_id(
        self, user_id: UUID, start: date = None, end: date = None
    ) -> List[FoodPurchase]:
        """Get all rows for a user, optionally bounded by an inclusive date range"""
        return (
            self._range_query(user_id, start, end)
            .order_by(FoodPurchase.date.asc())
            .all()
        )

    def create_many(self, rows: Sequence[FoodPurchase]) -> List[FoodPurchase]:
        """Insert rows in one transaction; either all land or none"""
        try:
            self.db.add_all(rows)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        for row in rows:
            self.db.refresh(row)
        return list(rows)

    def update_flags(
        self, user_id: UUID, record_id: UUID, day: date, fields: Dict[str, bool]
    ) -> Optional[FoodPurchase]:
        """Set only the given flag columns on one row; None unless id, owner and day match"""
        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update fields: {sorted(unknown)}")

        row = self.get_for_user(user_id, record_id, day)
        if row is None:
            return None
        try:
            for key, value in fields.items():
                setattr(row, key, bool(value))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(row)
        return row

    def delete_by_user_id(
        self, user_id: UUID, start: date = None, end: date = None
    ) -> int:
        """Delete a user's rows within an inclusive date range in one statement"""
        try:
            count = self._range_query(user_id, start, end).delete(
                synchronize_session=False
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return count
