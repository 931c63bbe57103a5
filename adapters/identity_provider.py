"""
Identity providers: resolve the user every ledger operation is scoped to.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, Optional
from uuid import UUID

import anyio
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import StoreUnavailableError, UnauthenticatedError
from repositories import AuthSessionRepository

logger = logging.getLogger("mealledger.identity")


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how session expiries are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class IdentityProvider(ABC):
    @abstractmethod
    async def current_user(self) -> UUID:
        """Return the authenticated user's id or raise UnauthenticatedError."""


class SessionTokenIdentityProvider(IdentityProvider):
    """Resolves an opaque bearer token against the auth_session table"""

    def __init__(self, token: Optional[str], session_factory: Callable[[], Session]):
        self._token = token
        self._session_factory = session_factory

    async def current_user(self) -> UUID:
        if not self._token:
            raise UnauthenticatedError("Not logged in")

        def lookup() -> Optional[UUID]:
            with self._session_factory() as db:
                session = AuthSessionRepository(db).get_active(self._token, utcnow())
                return session.user_id if session else None

        try:
            user_id = await anyio.to_thread.run_sync(lookup)
        except SQLAlchemyError as e:
            logger.error("session lookup failed: %s", e)
            raise StoreUnavailableError("Could not verify session") from e

        if user_id is None:
            logger.warning("rejected unknown or expired session token")
            raise UnauthenticatedError("Session expired or invalid")
        return user_id


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
