"""
Tests for the range reconciler.

Reconciliation guarantees one ledger row per calendar day of a range:
- Missing days are inserted with both flags false
- Existing rows keep their id and flags
- Repeated calls insert nothing
- Invalid ranges are rejected before the store is touched
- Store failures surface without a partial view
"""

import uuid
from datetime import date

import pytest

from test_fixtures import FakeLedgerStore, make_record, date_span, day
from services.reconciler import RangeReconciler, require_range
from domain.schemas.ledger_schemas import DateRange
from app.exceptions import (
    ConflictError,
    FetchFailedError,
    InsertFailedError,
    InvalidRangeError,
    StoreUnavailableError,
)

pytestmark = pytest.mark.anyio


def span(start: str, end: str) -> DateRange:
    return DateRange(start=day(start), end=day(end))


async def test_reconcile_fills_every_day_of_range():
    owner = uuid.uuid4()
    store = FakeLedgerStore()

    view = await RangeReconciler(store).reconcile(owner, span("2024-01-30", "2024-02-02"))

    assert view.dates == [
        date(2024, 1, 30),
        date(2024, 1, 31),
        date(2024, 2, 1),
        date(2024, 2, 2),
    ]
    assert all(r.id is not None for r in view.records)
    assert all(not r.breakfast and not r.dinner for r in view.records)
    assert all(r.owner == owner for r in view.records)


async def test_reconcile_preserves_existing_row():
    """
    Store holds only 2024-01-02; reconciling 01-01..01-03 adds the two
    missing days and leaves the existing row (id and flags) untouched.
    """
    owner = uuid.uuid4()
    existing = make_record("2024-01-02", breakfast=True, owner=owner, record_id=uuid.uuid4())
    store = FakeLedgerStore([existing])

    view = await RangeReconciler(store).reconcile(owner, span("2024-01-01", "2024-01-03"))

    assert [str(d) for d in view.dates] == ["2024-01-01", "2024-01-02", "2024-01-03"]
    assert view.records[1] == existing
    assert {r.date for r in store.inserted} == {date(2024, 1, 1), date(2024, 1, 3)}
    for new in (view.records[0], view.records[2]):
        assert new.breakfast is False and new.dinner is False


async def test_reconcile_is_idempotent():
    owner = uuid.uuid4()
    store = FakeLedgerStore()
    reconciler = RangeReconciler(store)
    date_range = span("2024-05-01", "2024-05-10")

    first = await reconciler.reconcile(owner, date_range)
    inserts_after_first = store.count("insert")
    second = await reconciler.reconcile(owner, date_range)

    assert second == first
    assert store.count("insert") == inserts_after_first == 1
    assert len(store.inserted) == 10


async def test_reconcile_single_day_range():
    owner = uuid.uuid4()
    store = FakeLedgerStore()

    view = await RangeReconciler(store).reconcile(owner, span("2024-02-29", "2024-02-29"))

    assert view.dates == [date(2024, 2, 29)]


async def test_reconcile_ignores_other_owners_rows():
    owner = uuid.uuid4()
    someone_else = make_record("2024-01-01", breakfast=True, dinner=True)
    store = FakeLedgerStore([someone_else])

    view = await RangeReconciler(store).reconcile(owner, span("2024-01-01", "2024-01-01"))

    assert view.records[0].owner == owner
    assert view.records[0].id != someone_else.id
    assert len(store.rows) == 2


async def test_reconcile_rejects_inverted_range_before_store_call():
    store = FakeLedgerStore()

    with pytest.raises(InvalidRangeError):
        await RangeReconciler(store).reconcile(uuid.uuid4(), span("2024-01-05", "2024-01-01"))

    assert store.calls == []


async def test_reconcile_rejects_absent_range():
    store = FakeLedgerStore()

    with pytest.raises(InvalidRangeError):
        await RangeReconciler(store).reconcile(uuid.uuid4(), None)

    assert store.calls == []


async def test_reconcile_rejects_range_longer_than_limit():
    store = FakeLedgerStore()
    reconciler = RangeReconciler(store, max_days=31)

    with pytest.raises(InvalidRangeError):
        await reconciler.reconcile(uuid.uuid4(), span("2024-01-01", "2024-02-01"))

    view = await reconciler.reconcile(uuid.uuid4(), span("2024-01-01", "2024-01-31"))
    assert len(view.records) == 31


async def test_reconcile_store_unavailable_returns_no_view():
    store = FakeLedgerStore()
    store.failures["select"] = StoreUnavailableError("down")

    with pytest.raises(StoreUnavailableError):
        await RangeReconciler(store).reconcile(uuid.uuid4(), span("2024-01-01", "2024-01-03"))

    assert store.inserted == []


async def test_reconcile_recovers_from_concurrent_insert():
    """
    Another session inserts 2024-01-02 between our select and insert.

    Verifies:
    - The conflict triggers a re-check instead of failing
    - The other session's row is kept, only truly missing days are added
    """
    owner = uuid.uuid4()
    store = FakeLedgerStore()
    racer = make_record("2024-01-02", dinner=True, owner=owner)

    def other_session_inserts(s):
        s.put(racer)

    store.before_insert = other_session_inserts

    view = await RangeReconciler(store).reconcile(owner, span("2024-01-01", "2024-01-03"))

    assert len(view.records) == 3
    assert view.records[1].dinner is True
    assert store.count("insert") == 2


async def test_reconcile_second_conflict_is_insert_failure():
    owner = uuid.uuid4()
    store = FakeLedgerStore()

    async def always_conflict(records):
        store.calls.append("insert")
        raise ConflictError("again")

    store.insert = always_conflict

    with pytest.raises(InsertFailedError):
        await RangeReconciler(store).reconcile(owner, span("2024-01-01", "2024-01-02"))


async def test_reconcile_gap_after_insert_is_fetch_failure():
    """A store that silently drops inserts must not produce a gapped view."""
    owner = uuid.uuid4()
    store = FakeLedgerStore()

    async def drop_inserts(records):
        store.calls.append("insert")
        return []

    store.insert = drop_inserts

    with pytest.raises(FetchFailedError):
        await RangeReconciler(store).reconcile(owner, span("2024-01-01", "2024-01-02"))


async def test_load_without_range_returns_all_rows_ascending():
    owner = uuid.uuid4()
    rows = [
        make_record(d, owner=owner, record_id=uuid.uuid4())
        for d in reversed(date_span("2023-12-30", 5))
    ]
    store = FakeLedgerStore(rows)

    view = await RangeReconciler(store).load(owner)

    assert view.range is None
    assert view.dates == sorted(r.date for r in rows)
    assert store.count("insert") == 0


async def test_load_with_range_does_not_insert():
    owner = uuid.uuid4()
    store = FakeLedgerStore([make_record("2024-01-02", owner=owner)])

    view = await RangeReconciler(store).load(owner, span("2024-01-01", "2024-01-03"))

    assert [str(d) for d in view.dates] == ["2024-01-02"]
    assert store.inserted == []


def test_require_range_accepts_equal_bounds():
    d = date(2024, 1, 1)
    assert require_range(DateRange(start=d, end=d)).length == 1


def test_missing_records_skips_present_days():
    owner = uuid.uuid4()
    existing = [make_record("2024-01-02", owner=owner)]

    missing = RangeReconciler.missing_records(owner, span("2024-01-01", "2024-01-04"), existing)

    assert [m.date for m in missing] == [
        date(2024, 1, 1),
        date(2024, 1, 3),
        date(2024, 1, 4),
    ]
    assert all(m.id is None for m in missing)
