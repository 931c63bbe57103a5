"""
Tests for the ledger aggregator.

Covers the pure summary math:
- Empty ranges
- Order independence
- Over-budget ranges (negative remaining is valid)
- Per-row totals and the printable report
"""

import random
import uuid
from decimal import Decimal

from test_fixtures import make_record, date_span
from services.aggregation_service import LedgerAggregator
from domain.schemas.ledger_schemas import DateRange, LedgerView


def test_summarize_empty_rows_leaves_whole_budget():
    summary = LedgerAggregator.summarize([], 40, 1000)

    assert summary.selected_count == 0
    assert summary.total_cost == 0
    assert summary.remaining == 1000
    assert summary.over_budget is False
    assert summary.overage == 0


def test_summarize_counts_each_selected_flag():
    owner = uuid.uuid4()
    rows = [
        make_record("2024-01-01", breakfast=True, dinner=False, owner=owner),
        make_record("2024-01-02", breakfast=True, dinner=True, owner=owner),
        make_record("2024-01-03", breakfast=False, dinner=False, owner=owner),
    ]

    summary = LedgerAggregator.summarize(rows, 40, 1000)

    assert summary.selected_count == 3
    assert summary.breakfast_count == 2
    assert summary.dinner_count == 1
    assert summary.total_cost == Decimal("120")
    assert summary.remaining == Decimal("880")


def test_summarize_over_budget_is_not_an_error():
    """
    Twenty days with both meals at 40 each against a budget of 1000.

    Verifies:
    - 40 meals, cost 1600, remaining -600
    - over_budget flag and overage amount
    """
    owner = uuid.uuid4()
    rows = [
        make_record(d, breakfast=True, dinner=True, owner=owner)
        for d in date_span("2024-03-01", 20)
    ]

    summary = LedgerAggregator.summarize(rows, 40, 1000)

    assert summary.selected_count == 40
    assert summary.total_cost == 1600
    assert summary.remaining == -600
    assert summary.over_budget is True
    assert summary.overage == 600


def test_summarize_is_order_independent():
    owner = uuid.uuid4()
    rows = [
        make_record(d, breakfast=i % 2 == 0, dinner=i % 3 == 0, owner=owner)
        for i, d in enumerate(date_span("2024-02-01", 15))
    ]
    shuffled = list(rows)
    random.Random(7).shuffle(shuffled)

    assert LedgerAggregator.summarize(rows, 40, 1000) == LedgerAggregator.summarize(
        shuffled, 40, 1000
    )


def test_summarize_accepts_decimal_prices():
    rows = [make_record("2024-01-01", breakfast=True, dinner=True)]

    summary = LedgerAggregator.summarize(rows, Decimal("12.50"), Decimal("100"))

    assert summary.total_cost == Decimal("25.00")
    assert summary.remaining == Decimal("75.00")


def test_summarize_rows_sorted_with_totals():
    owner = uuid.uuid4()
    rows = [
        make_record("2024-01-03", dinner=True, owner=owner),
        make_record("2024-01-01", breakfast=True, dinner=True, owner=owner),
        make_record("2024-01-02", owner=owner),
    ]

    summaries = LedgerAggregator.summarize_rows(rows)

    assert [str(s.date) for s in summaries] == ["2024-01-01", "2024-01-02", "2024-01-03"]
    assert [s.total for s in summaries] == [2, 0, 1]


def test_render_report_includes_totals_and_overage():
    owner = uuid.uuid4()
    records = [
        make_record(d, breakfast=True, dinner=True, owner=owner)
        for d in date_span("2024-01-01", 13)
    ]
    view = LedgerView(
        owner=owner,
        range=DateRange(start=records[0].date, end=records[-1].date),
        records=records,
    )
    summary = LedgerAggregator.summarize(records, 40, 1000)

    report = LedgerAggregator.render_report(view, summary, "₹")

    assert "Period: Jan 01, 2024 - Jan 13, 2024" in report
    assert "Total meals selected: 26" in report
    assert "Total price: ₹1040" in report
    assert "Budget remaining: ₹-40 of ₹1000" in report
    assert "Budget exceeded by ₹40" in report


def test_render_report_within_budget_has_no_warning():
    owner = uuid.uuid4()
    records = [make_record("2024-01-01", breakfast=True, owner=owner)]
    view = LedgerView(owner=owner, range=None, records=records)
    summary = LedgerAggregator.summarize(records, 40, 1000)

    report = LedgerAggregator.render_report(view, summary)

    assert "Budget exceeded" not in report
    assert "Jan 01, 2024" in report
