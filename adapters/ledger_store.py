"""
Ledger store interface.

The store holds one row per (owner, date). Every operation is scoped by owner
and range filters are inclusive on both bounds. Implementations raise the
StoreError family from app.exceptions and ConflictError when an insert would
break the one-row-per-day rule.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from domain.schemas.ledger_schemas import DateRange, MealRecord


class LedgerStore(ABC):
    @abstractmethod
    async def select(
        self, owner: UUID, date_range: Optional[DateRange] = None
    ) -> List[MealRecord]:
        """Rows of ``owner`` ascending by date, optionally limited to a range."""

    @abstractmethod
    async def insert(self, records: Sequence[MealRecord]) -> List[MealRecord]:
        """Persist new records and return them with their assigned ids."""

    @abstractmethod
    async def update(
        self, owner: UUID, record_id: UUID, day: date, fields: Dict[str, bool]
    ) -> MealRecord:
        """
        Set only ``fields`` on the row with ``record_id`` and return it.

        The row must belong to ``owner`` and fall on ``day``; otherwise
        NotFoundError is raised and nothing changes.
        """

    @abstractmethod
    async def delete(
        self, owner: UUID, date_range: Optional[DateRange] = None
    ) -> int:
        """Delete rows of ``owner`` (within the range, if given); returns the count."""
