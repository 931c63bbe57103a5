"""
Centralized dependency injection for FastAPI.
This module provides all injectable dependencies used across the application.
"""

from typing import Callable, Generator, Optional
from uuid import UUID

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from adapters import (
    IdentityProvider,
    LedgerStore,
    SessionTokenIdentityProvider,
    SQLLedgerStore,
    parse_bearer,
)
from app.config import settings
from domain.models import SessionLocal
from services import MutationApplier, RangeReconciler, RecordLockRegistry, ResetService


def get_session_factory() -> Callable[[], Session]:
    """Session factory for the ledger database; overridden in tests"""
    return SessionLocal


def get_db(
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> Generator[Session, None, None]:
    """
    Database session dependency.
    Yields a SQLAlchemy session and ensures it's closed after use.
    """
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


def get_bearer_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    return parse_bearer(authorization)


def get_identity_provider(
    token: Optional[str] = Depends(get_bearer_token),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> IdentityProvider:
    return SessionTokenIdentityProvider(token, session_factory)


async def get_current_user_id(
    identity: IdentityProvider = Depends(get_identity_provider),
) -> UUID:
    """Authenticated user id; raises UnauthenticatedError otherwise"""
    return await identity.current_user()


def get_ledger_store(
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> LedgerStore:
    return SQLLedgerStore(session_factory)


def get_record_locks(request: Request) -> RecordLockRegistry:
    """Lock registry shared by every request of this app instance"""
    return request.app.state.record_locks


def get_reconciler(store: LedgerStore = Depends(get_ledger_store)) -> RangeReconciler:
    return RangeReconciler(store, max_days=settings.max_range_days)


def get_mutation_applier(
    store: LedgerStore = Depends(get_ledger_store),
    locks: RecordLockRegistry = Depends(get_record_locks),
) -> MutationApplier:
    return MutationApplier(store, locks)


def get_reset_service(store: LedgerStore = Depends(get_ledger_store)) -> ResetService:
    return ResetService(store)
