from decimal import Decimal
from typing import Iterable, List, Union

from domain.schemas.ledger_schemas import (
    LedgerSummary,
    LedgerView,
    MealRecord,
    RowSummary,
)

Money = Union[Decimal, int, str]


def _money(value: Money) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


class LedgerAggregator:
    @staticmethod
    def summarize(
        rows: Iterable[MealRecord], meal_price: Money, budget: Money
    ) -> LedgerSummary:
        """
        Compute meal counts, cost and budget remaining for a set of rows.

        Pure and order independent. An empty set gives zero meals, zero cost and
        the whole budget remaining. A negative remaining amount means the range
        is over budget; that is a valid state, not an error.

        Args:
            rows: Ledger rows for the active range
            meal_price: Price of one meal
            budget: Overall budget

        Returns:
            LedgerSummary with selected/breakfast/dinner counts, total_cost and remaining
        """
        price = _money(meal_price)
        total_budget = _money(budget)

        breakfasts = 0
        dinners = 0
        for row in rows:
            breakfasts += 1 if row.breakfast else 0
            dinners += 1 if row.dinner else 0

        selected = breakfasts + dinners
        total_cost = price * selected
        return LedgerSummary(
            selected_count=selected,
            breakfast_count=breakfasts,
            dinner_count=dinners,
            total_cost=total_cost,
            remaining=total_budget - total_cost,
            meal_price=price,
            budget=total_budget,
        )

    @staticmethod
    def summarize_rows(rows: Iterable[MealRecord]) -> List[RowSummary]:
        """Per-day totals, ascending by date"""
        return [
            RowSummary(
                date=r.date, breakfast=r.breakfast, dinner=r.dinner, total=r.meal_count
            )
            for r in sorted(rows, key=lambda r: r.date)
        ]

    @staticmethod
    def render_report(
        view: LedgerView, summary: LedgerSummary, currency: str = ""
    ) -> str:
        """Printable plain-text report of a ledger view"""
        lines = ["Food Purchase Report"]
        if view.range is not None:
            lines.append(
                f"Period: {view.range.start.strftime('%b %d, %Y')} - "
                f"{view.range.end.strftime('%b %d, %Y')}"
            )
        lines.append("")
        lines.append(f"{'Date':<14}{'Breakfast':<11}{'Dinner':<8}{'Total':>5}")
        for row in LedgerAggregator.summarize_rows(view.records):
            lines.append(
                f"{row.date.strftime('%b %d, %Y'):<14}"
                f"{'x' if row.breakfast else '-':<11}"
                f"{'x' if row.dinner else '-':<8}"
                f"{row.total:>5}"
            )
        lines.append(
            f"{'Total':<14}{summary.breakfast_count:<11}"
            f"{summary.dinner_count:<8}{summary.selected_count:>5}"
        )
        lines.append("")
        lines.append(f"Total meals selected: {summary.selected_count}")
        lines.append(
            f"Total price: {currency}{summary.total_cost} "
            f"(@{currency}{summary.meal_price} per meal)"
        )
        lines.append(
            f"Budget remaining: {currency}{summary.remaining} "
            f"of {currency}{summary.budget}"
        )
        if summary.over_budget:
            lines.append(f"Budget exceeded by {currency}{summary.overage}")
        return "\n".join(lines) + "\n"
