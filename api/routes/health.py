"""Health check and utility routes"""

from typing import Callable

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_session_factory

router = APIRouter(tags=["Health"])
logger = logging.getLogger("mealledger.api.health")


@router.get("/health-check")
def health_check():
    """Basic health check endpoint"""
    return {"status": "ok", "service": "MealLedger"}


@router.get("/health/database")
def database_status(
    session_factory: Callable[[], Session] = Depends(get_session_factory),
):
    """Report whether the ledger database answers a trivial query."""
    try:
        with session_factory() as db:
            db.execute(text("SELECT 1"))
        return {"database": "ok"}
    except Exception as e:
        logger.exception("Error checking database status")
        return {"database": "unavailable", "error": str(e)}
