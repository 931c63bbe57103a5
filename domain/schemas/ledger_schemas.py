import datetime as dt
from decimal import Decimal
from typing import Iterator, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from domain.enums import MealSlot, ToggleStatus


class MealRecord(BaseModel):
    """One user's breakfast/dinner flags for one calendar day.

    ``id`` is None until the record has been persisted.
    """

    id: Optional[UUID] = None
    date: dt.date
    breakfast: bool = False
    dinner: bool = False
    owner: UUID

    model_config = {"from_attributes": True, "frozen": True}

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    @property
    def meal_count(self) -> int:
        return int(self.breakfast) + int(self.dinner)

    def flag(self, slot: MealSlot) -> bool:
        return getattr(self, slot.value)

    def with_flag(self, slot: MealSlot, value: bool) -> "MealRecord":
        return self.model_copy(update={slot.value: value})


class DateRange(BaseModel):
    """Inclusive calendar-date window"""

    start: dt.date
    end: dt.date

    model_config = {"frozen": True}

    @property
    def is_valid(self) -> bool:
        return self.start <= self.end

    @property
    def length(self) -> int:
        """Number of days in the range, both endpoints included."""
        return (self.end - self.start).days + 1

    def days(self) -> Iterator[dt.date]:
        day = self.start
        while day <= self.end:
            yield day
            day += dt.timedelta(days=1)

    def __contains__(self, day: dt.date) -> bool:
        return self.start <= day <= self.end


class LedgerView(BaseModel):
    """Records for the active range, ascending by date"""

    owner: UUID
    range: Optional[DateRange] = None
    records: List[MealRecord] = Field(default_factory=list)

    @property
    def dates(self) -> List[dt.date]:
        return [r.date for r in self.records]


class RowSummary(BaseModel):
    date: dt.date
    breakfast: bool
    dinner: bool
    total: int


class LedgerSummary(BaseModel):
    """Totals derived from a set of ledger rows; never persisted"""

    selected_count: int
    breakfast_count: int
    dinner_count: int
    total_cost: Decimal
    remaining: Decimal
    meal_price: Decimal
    budget: Decimal

    @property
    def over_budget(self) -> bool:
        return self.remaining < 0

    @property
    def overage(self) -> Decimal:
        return -self.remaining if self.remaining < 0 else Decimal("0")


class PendingToggle(BaseModel):
    """An optimistic flip awaiting confirmation from the store.

    ``speculative`` is shown immediately; once the store call resolves the
    toggle is either confirmed (``confirmed`` carries the stored record) or
    rolled back to ``original``.
    """

    slot: MealSlot
    original: MealRecord
    speculative: MealRecord
    status: ToggleStatus = ToggleStatus.PENDING
    confirmed: Optional[MealRecord] = None

    model_config = {"frozen": True}

    def confirm(self, record: MealRecord) -> "PendingToggle":
        return self.model_copy(
            update={"status": ToggleStatus.CONFIRMED, "confirmed": record}
        )

    def rollback(self) -> "PendingToggle":
        return self.model_copy(
            update={"status": ToggleStatus.ROLLED_BACK, "confirmed": None}
        )

    @property
    def visible(self) -> MealRecord:
        """The record a client should display right now."""
        if self.status == ToggleStatus.CONFIRMED:
            return self.confirmed
        if self.status == ToggleStatus.ROLLED_BACK:
            return self.original
        return self.speculative


# =============================================================================
# API payloads
# =============================================================================


class MealRecordInput(BaseModel):
    """Record as sent by a client; the owner always comes from the session"""

    id: Optional[UUID] = None
    date: dt.date
    breakfast: bool = False
    dinner: bool = False


class ToggleRequest(BaseModel):
    record: MealRecordInput
    slot: MealSlot


class ToggleResponse(BaseModel):
    record: MealRecord
    status: ToggleStatus


class SummaryResponse(BaseModel):
    selected_count: int
    breakfast_count: int
    dinner_count: int
    total_cost: Decimal
    remaining: Decimal
    meal_price: Decimal
    budget: Decimal
    over_budget: bool
    overage: Decimal

    @classmethod
    def from_summary(cls, summary: LedgerSummary) -> "SummaryResponse":
        return cls(
            **summary.model_dump(),
            over_budget=summary.over_budget,
            overage=summary.overage,
        )


class LedgerResponse(BaseModel):
    range: Optional[DateRange] = None
    records: List[MealRecord]
    rows: List[RowSummary]
    summary: SummaryResponse


class ResetResponse(BaseModel):
    deleted: int
    range: Optional[DateRange] = None
