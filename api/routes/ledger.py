"""Meal ledger routes: reconcile a range, toggle meals, summaries and reset"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
import logging

from api.dependencies import (
    get_current_user_id,
    get_mutation_applier,
    get_reconciler,
    get_reset_service,
)
from app.config import settings
from app.exceptions import InvalidRangeError
from domain.schemas.ledger_schemas import (
    DateRange,
    LedgerResponse,
    LedgerView,
    MealRecord,
    ResetResponse,
    SummaryResponse,
    ToggleRequest,
    ToggleResponse,
)
from services import LedgerAggregator, MutationApplier, RangeReconciler, ResetService

router = APIRouter(prefix="/ledger", tags=["Meal Ledger"])
logger = logging.getLogger("mealledger.api.ledger")


def optional_range(
    start: Optional[date] = Query(None, description="First day (inclusive)"),
    end: Optional[date] = Query(None, description="Last day (inclusive)"),
) -> Optional[DateRange]:
    """Range from query params; None when neither bound is given"""
    if start is None and end is None:
        return None
    if start is None or end is None:
        raise InvalidRangeError("Please select both start and end dates")
    return DateRange(start=start, end=end)


def to_response(view: LedgerView) -> LedgerResponse:
    summary = LedgerAggregator.summarize(
        view.records, settings.meal_price, settings.budget
    )
    return LedgerResponse(
        range=view.range,
        records=view.records,
        rows=LedgerAggregator.summarize_rows(view.records),
        summary=SummaryResponse.from_summary(summary),
    )


@router.get("", response_model=LedgerResponse)
async def get_ledger(
    date_range: Optional[DateRange] = Depends(optional_range),
    user_id: UUID = Depends(get_current_user_id),
    reconciler: RangeReconciler = Depends(get_reconciler),
):
    """
    Return the user's ledger rows with totals.

    Without a range every row the user has is returned, ascending by date.
    Nothing is created; use POST /ledger/reconcile to fill in missing days.
    """
    view = await reconciler.load(user_id, date_range)
    return to_response(view)


@router.post("/reconcile", response_model=LedgerResponse)
async def reconcile_range(
    date_range: DateRange,
    user_id: UUID = Depends(get_current_user_id),
    reconciler: RangeReconciler = Depends(get_reconciler),
):
    """
    Make sure every day in the range has a row, then return the ledger.

    Days that already have a row are left untouched; new days start with
    neither meal selected. Safe to call repeatedly.
    """
    view = await reconciler.reconcile(user_id, date_range)
    return to_response(view)


@router.post("/toggle", response_model=ToggleResponse)
async def toggle_meal(
    request: ToggleRequest,
    user_id: UUID = Depends(get_current_user_id),
    applier: MutationApplier = Depends(get_mutation_applier),
):
    """
    Flip breakfast or dinner for one day.

    On a store failure the response is 502 with the unchanged record under
    ``error.details.record`` so the client can revert its optimistic flip.
    A record id the user does not have on that date is a 404 carrying the
    same details.
    """
    record = MealRecord(owner=user_id, **request.record.model_dump())
    resolved = await applier.apply(MutationApplier.begin(record, request.slot))
    return ToggleResponse(record=resolved.visible, status=resolved.status)


@router.get("/summary", response_model=SummaryResponse)
async def get_summary(
    date_range: Optional[DateRange] = Depends(optional_range),
    user_id: UUID = Depends(get_current_user_id),
    reconciler: RangeReconciler = Depends(get_reconciler),
):
    """Totals only: meals selected, total price and budget remaining"""
    view = await reconciler.load(user_id, date_range)
    summary = LedgerAggregator.summarize(
        view.records, settings.meal_price, settings.budget
    )
    return SummaryResponse.from_summary(summary)


@router.get("/report", response_class=PlainTextResponse)
async def get_report(
    date_range: Optional[DateRange] = Depends(optional_range),
    user_id: UUID = Depends(get_current_user_id),
    reconciler: RangeReconciler = Depends(get_reconciler),
):
    """Printable plain-text report of the range"""
    view = await reconciler.load(user_id, date_range)
    summary = LedgerAggregator.summarize(
        view.records, settings.meal_price, settings.budget
    )
    return LedgerAggregator.render_report(view, summary, settings.currency_symbol)


@router.delete("", response_model=ResetResponse)
async def reset_range(
    date_range: Optional[DateRange] = Depends(optional_range),
    user_id: UUID = Depends(get_current_user_id),
    reset_service: ResetService = Depends(get_reset_service),
):
    """
    Delete every row in the range.

    The response carries ``range: null``; clients should clear their active range.
    """
    deleted = await reset_service.reset(user_id, date_range)
    return ResetResponse(deleted=deleted, range=None)
