"""
SQLAlchemy-backed ledger store.

Each call opens its own session and runs the blocking work in a worker thread
so the event loop never waits on the database.
"""

import logging
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence
from uuid import UUID

import anyio
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from adapters.ledger_store import LedgerStore
from app.exceptions import (
    ConflictError,
    DeleteFailedError,
    FetchFailedError,
    InsertFailedError,
    NotFoundError,
    StoreUnavailableError,
    UpdateFailedError,
)
from domain.mappers import MealRecordMapper
from domain.schemas.ledger_schemas import DateRange, MealRecord
from repositories import MealRecordRepository

logger = logging.getLogger("mealledger.store")


def _bounds(date_range: Optional[DateRange]):
    if date_range is None:
        return None, None
    return date_range.start, date_range.end


class SQLLedgerStore(LedgerStore):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    async def _run(self, fn, failure_cls, action: str):
        try:
            return await anyio.to_thread.run_sync(fn)
        except OperationalError as e:
            logger.error("ledger store unreachable during %s: %s", action, e)
            raise StoreUnavailableError(f"Ledger store unavailable: {action}") from e
        except IntegrityError as e:
            logger.warning("ledger store conflict during %s: %s", action, e.orig)
            raise ConflictError(f"Conflicting ledger rows: {action}") from e
        except SQLAlchemyError as e:
            logger.exception("ledger store error during %s", action)
            raise failure_cls(f"Ledger store failed: {action}") from e

    async def select(
        self, owner: UUID, date_range: Optional[DateRange] = None
    ) -> List[MealRecord]:
        start, end = _bounds(date_range)

        def work() -> List[MealRecord]:
            with self._session_factory() as db:
                rows = MealRecordRepository(db).get_by_user_id(owner, start, end)
                return [MealRecordMapper.to_domain(r) for r in rows]

        return await self._run(work, FetchFailedError, "select")

    async def insert(self, records: Sequence[MealRecord]) -> List[MealRecord]:
        if not records:
            return []

        def work() -> List[MealRecord]:
            with self._session_factory() as db:
                rows = [MealRecordMapper.to_row(r) for r in records]
                saved = MealRecordRepository(db).create_many(rows)
                return [MealRecordMapper.to_domain(r) for r in saved]

        return await self._run(work, InsertFailedError, "insert")

    async def update(
        self, owner: UUID, record_id: UUID, day: date, fields: Dict[str, bool]
    ) -> MealRecord:
        def work() -> Optional[MealRecord]:
            with self._session_factory() as db:
                row = MealRecordRepository(db).update_flags(
                    owner, record_id, day, fields
                )
                return MealRecordMapper.to_domain(row) if row is not None else None

        record = await self._run(work, UpdateFailedError, "update")
        if record is None:
            raise NotFoundError(f"Meal record {record_id} not found for {day}")
        return record

    async def delete(
        self, owner: UUID, date_range: Optional[DateRange] = None
    ) -> int:
        start, end = _bounds(date_range)

        def work() -> int:
            with self._session_factory() as db:
                return MealRecordRepository(db).delete_by_user_id(owner, start, end)

        return await self._run(work, DeleteFailedError, "delete")
