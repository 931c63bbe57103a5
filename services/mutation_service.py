import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncIterator, Dict, List, Tuple
from uuid import UUID

import anyio

from adapters.ledger_store import LedgerStore
from app.exceptions import (
    ConflictError,
    NotFoundError,
    StoreError,
    UpdateFailedError,
)
from domain.enums import MealSlot
from domain.schemas.ledger_schemas import DateRange, MealRecord, PendingToggle

logger = logging.getLogger("mealledger.mutations")

RecordKey = Tuple[UUID, date]


class RecordLockRegistry:
    """
    One lock per (owner, date), created on demand.

    Entries are reference counted and dropped once no task holds or waits on
    them, so the map only grows with the number of records in flight.
    """

    def __init__(self):
        self._entries: Dict[RecordKey, List] = {}  # key -> [lock, users]

    def __len__(self) -> int:
        return len(self._entries)

    @asynccontextmanager
    async def hold(self, owner: UUID, day: date) -> AsyncIterator[None]:
        key = (owner, day)
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = [anyio.Lock(), 0]
        entry[1] += 1
        try:
            async with entry[0]:
                yield
        finally:
            entry[1] -= 1
            if entry[1] == 0:
                del self._entries[key]


class MutationApplier:
    """Applies single-flag toggles, serialized per record"""

    def __init__(self, store: LedgerStore, locks: RecordLockRegistry):
        self.store = store
        self.locks = locks

    @staticmethod
    def begin(record: MealRecord, slot: MealSlot) -> PendingToggle:
        """Flip ``slot`` on a local copy; nothing is sent to the store yet."""
        slot = MealSlot(slot)
        return PendingToggle(
            slot=slot,
            original=record,
            speculative=record.with_flag(slot, not record.flag(slot)),
        )

    async def apply(self, pending: PendingToggle) -> PendingToggle:
        """
        Send a pending toggle to the store and resolve it.

        A persisted record gets a single-field update matched on id, owner and
        date. A record without an id is inserted with the flipped flag and the
        other flag as shown, unless a row for that day already exists, in which
        case only the named flag is updated on it.

        Raises:
            NotFoundError: no row of the owner has this id on this date; the
                unchanged record is in ``details["record"]``
            UpdateFailedError: the store rejected the change; ``pending`` on the
                error is the rolled-back toggle
        """
        record = pending.speculative
        slot = pending.slot
        value = record.flag(slot)

        async with self.locks.hold(record.owner, record.date):
            try:
                if record.is_persisted:
                    stored = await self.store.update(
                        record.owner, record.id, record.date, {slot.value: value}
                    )
                else:
                    stored = await self._persist_new(record, slot, value)
            except NotFoundError as e:
                logger.warning(
                    f"toggle_rejected owner={record.owner} date={record.date} "
                    f"record_id={record.id} error={e}"
                )
                raise NotFoundError(
                    f"No meal record {record.id} on {record.date}",
                    details={"record": pending.original.model_dump(mode="json")},
                ) from e
            except (StoreError, ConflictError) as e:
                logger.warning(
                    f"toggle_failed owner={record.owner} date={record.date} "
                    f"slot={slot.value} error={e}"
                )
                rolled_back = pending.rollback()
                raise UpdateFailedError(
                    f"Could not update {slot.value} for {record.date}",
                    details={"record": pending.original.model_dump(mode="json")},
                    pending=rolled_back,
                ) from e

        logger.info(
            f"toggled owner={record.owner} date={record.date} "
            f"slot={slot.value} value={value} record_id={stored.id}"
        )
        return pending.confirm(stored)

    async def _persist_new(
        self, record: MealRecord, slot: MealSlot, value: bool
    ) -> MealRecord:
        day = DateRange(start=record.date, end=record.date)
        existing = await self.store.select(record.owner, day)
        if existing:
            logger.info(
                f"toggle_adopted_existing owner={record.owner} date={record.date} "
                f"record_id={existing[0].id}"
            )
            return await self.store.update(
                record.owner, existing[0].id, record.date, {slot.value: value}
            )
        inserted = await self.store.insert([record])
        return inserted[0]

    async def toggle(self, record: MealRecord, slot: MealSlot) -> MealRecord:
        """Flip ``slot`` on ``record`` and return the stored result"""
        resolved = await self.apply(self.begin(record, slot))
        return resolved.confirmed
