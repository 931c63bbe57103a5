import logging
import secrets
from datetime import timedelta
from typing import Optional
from uuid import UUID

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from sqlalchemy.orm import Session

from adapters.identity_provider import utcnow
from app.config import settings
from app.exceptions import NotFoundError, UnauthorizedError
from domain.models import AppUser, AuthSession
from repositories import AuthSessionRepository, UserRepository

logger = logging.getLogger("mealledger.auth")

_hasher = PasswordHasher()


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    @staticmethod
    def register(
        db: Session, email: str, password: str, full_name: Optional[str] = None
    ) -> AppUser:
        """
        Create a user account with an argon2 password hash.

        Raises:
            ConflictError: If the email is already registered
        """
        email = _normalize_email(email)
        user = UserRepository(db).create_user(
            email=email, password_hash=_hasher.hash(password), full_name=full_name
        )
        logger.info(f"user_registered user_id={user.user_id}")
        return user

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> AppUser:
        """Return the user for valid credentials or raise UnauthorizedError."""
        user_repo = UserRepository(db)
        user = user_repo.get_by_email(_normalize_email(email))
        if user is None:
            logger.warning("login_failed reason=unknown_email")
            raise UnauthorizedError("Invalid email or password")

        try:
            _hasher.verify(user.password_hash, password)
        except (VerifyMismatchError, VerificationError, InvalidHash):
            logger.warning(f"login_failed user_id={user.user_id} reason=bad_password")
            raise UnauthorizedError("Invalid email or password")

        if _hasher.check_needs_rehash(user.password_hash):
            user_repo.update_password_hash(user, _hasher.hash(password))
        return user

    @staticmethod
    def login(db: Session, email: str, password: str) -> AuthSession:
        """Verify credentials and issue a new session token."""
        user = AuthService.authenticate(db, email, password)
        session_repo = AuthSessionRepository(db)
        now = utcnow()
        session_repo.delete_expired(now)
        session = session_repo.create_session(
            token=secrets.token_urlsafe(32),
            user_id=user.user_id,
            expires_at=now + timedelta(hours=settings.session_ttl_hours),
        )
        logger.info(f"login user_id={user.user_id}")
        return session

    @staticmethod
    def logout(db: Session, token: str) -> bool:
        """Delete a session. Returns True if it existed."""
        return AuthSessionRepository(db).delete(token)

    @staticmethod
    def get_user(db: Session, user_id: UUID) -> AppUser:
        user = UserRepository(db).get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user
