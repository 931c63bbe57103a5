import logging
from datetime import date
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from adapters.ledger_store import LedgerStore
from app.exceptions import (
    ConflictError,
    FetchFailedError,
    InsertFailedError,
    InvalidRangeError,
)
from domain.schemas.ledger_schemas import DateRange, LedgerView, MealRecord

logger = logging.getLogger("mealledger.reconciler")


def require_range(
    date_range: Optional[DateRange], max_days: Optional[int] = None
) -> DateRange:
    """Reject an absent, inverted, or over-long range before any store call."""
    if date_range is None:
        raise InvalidRangeError("Please select both start and end dates")
    if not date_range.is_valid:
        raise InvalidRangeError(
            f"Start date {date_range.start} is after end date {date_range.end}",
            details={"start": str(date_range.start), "end": str(date_range.end)},
        )
    if max_days is not None and date_range.length > max_days:
        raise InvalidRangeError(
            f"Date range spans {date_range.length} days; the limit is {max_days}",
            details={"length": date_range.length, "max_days": max_days},
        )
    return date_range


class RangeReconciler:
    """Guarantees one ledger row per calendar day of a range"""

    def __init__(self, store: LedgerStore, max_days: Optional[int] = None):
        self.store = store
        self.max_days = max_days

    @staticmethod
    def missing_records(
        owner: UUID, date_range: DateRange, existing: Iterable[MealRecord]
    ) -> List[MealRecord]:
        """New blank records for every day in the range without a row"""
        present = {r.date for r in existing}
        return [
            MealRecord(date=day, breakfast=False, dinner=False, owner=owner)
            for day in date_range.days()
            if day not in present
        ]

    async def reconcile(
        self, owner: UUID, date_range: Optional[DateRange]
    ) -> LedgerView:
        """
        Ensure every day of ``date_range`` has exactly one row and return the view.

        Existing rows are never touched. Missing days get a row with both flags
        false. When another writer inserts one of the same days first, the
        missing set is re-checked once and the insert retried; a second conflict
        is reported as InsertFailedError.

        Raises:
            InvalidRangeError: range absent, inverted or too long
            StoreUnavailableError: store unreachable
            FetchFailedError / InsertFailedError: store rejected the operation
        """
        date_range = require_range(date_range, self.max_days)

        existing = await self.store.select(owner, date_range)
        missing = self.missing_records(owner, date_range, existing)

        if missing:
            try:
                await self.store.insert(missing)
            except ConflictError:
                logger.warning(
                    f"reconcile_conflict owner={owner} range={date_range.start}..{date_range.end}; re-checking"
                )
                existing = await self.store.select(owner, date_range)
                missing = self.missing_records(owner, date_range, existing)
                if missing:
                    try:
                        await self.store.insert(missing)
                    except ConflictError as e:
                        raise InsertFailedError(
                            "Could not create ledger rows: concurrent changes to the same dates"
                        ) from e

            logger.info(
                f"reconcile_inserted owner={owner} count={len(missing)} "
                f"range={date_range.start}..{date_range.end}"
            )

        rows = await self.store.select(owner, date_range)
        view = self._build_view(owner, date_range, rows)
        logger.info(
            f"reconciled owner={owner} range={date_range.start}..{date_range.end} "
            f"days={len(view.records)}"
        )
        return view

    async def load(
        self, owner: UUID, date_range: Optional[DateRange] = None
    ) -> LedgerView:
        """Read-only fetch; without a range every row of the owner is returned"""
        if date_range is not None:
            date_range = require_range(date_range, self.max_days)
        rows = await self.store.select(owner, date_range)
        return LedgerView(
            owner=owner, range=date_range, records=self._dedupe(owner, rows)
        )

    @staticmethod
    def _dedupe(owner: UUID, rows: Iterable[MealRecord]) -> List[MealRecord]:
        by_date: Dict[date, MealRecord] = {}
        for row in sorted(rows, key=lambda r: r.date):
            if row.date in by_date:
                logger.warning(
                    f"duplicate_row owner={owner} date={row.date} kept={by_date[row.date].id} ignored={row.id}"
                )
                continue
            by_date[row.date] = row
        return list(by_date.values())

    def _build_view(
        self, owner: UUID, date_range: DateRange, rows: Iterable[MealRecord]
    ) -> LedgerView:
        records = [r for r in self._dedupe(owner, rows) if r.date in date_range]
        covered = {r.date for r in records}
        gaps = [day for day in date_range.days() if day not in covered]
        if gaps:
            raise FetchFailedError(
                f"Ledger store returned {len(gaps)} day(s) without rows",
                details={"missing": [str(d) for d in gaps[:10]]},
            )
        return LedgerView(owner=owner, range=date_range, records=records)
