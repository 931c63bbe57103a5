"""
Meal record mappers.
Handles transformation between the FoodPurchase ORM model and MealRecord values.
"""

from domain.models import FoodPurchase
from domain.schemas.ledger_schemas import MealRecord


class MealRecordMapper:
    """Mapper for ledger row transformations."""

    @staticmethod
    def to_domain(row: FoodPurchase) -> MealRecord:
        return MealRecord(
            id=row.id,
            date=row.date,
            breakfast=bool(row.breakfast),
            dinner=bool(row.dinner),
            owner=row.user_id,
        )

    @staticmethod
    def to_row(record: MealRecord) -> FoodPurchase:
        """
        Build an unsaved ORM row from a record.

        The record id is carried over when set so callers can pre-assign it;
        otherwise the column default generates one on flush.
        """
        row = FoodPurchase(
            user_id=record.owner,
            date=record.date,
            breakfast=record.breakfast,
            dinner=record.dinner,
        )
        if record.id is not None:
            row.id = record.id
        return row
