"""
User Repository - Data access layer for users and their login sessions
"""

from typing import Optional
from uuid import UUID
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from repositories.base import BaseRepository
from domain.models import AppUser, AuthSession
from app.exceptions import ConflictError


class UserRepository(BaseRepository[AppUser]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, AppUser)

    def get_by_id(self, user_id: UUID) -> Optional[AppUser]:
        """Get user by ID"""
        return self.db.query(AppUser).filter(AppUser.user_id == user_id).first()

    def get_by_email(self, email: str) -> Optional[AppUser]:
        """Get user by email"""
        return self.db.query(AppUser).filter(AppUser.email == email).first()

    def create_user(
        self, email: str, password_hash: str, full_name: str = None
    ) -> AppUser:
        """Create a new user"""
        user = AppUser(email=email, password_hash=password_hash, full_name=full_name)
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"User with email {email} already exists")

    def update_password_hash(self, user: AppUser, password_hash: str) -> AppUser:
        user.password_hash = password_hash
        self.db.commit()
        self.db.refresh(user)
        return user


class AuthSessionRepository(BaseRepository[AuthSession]):
    """Repository for login session data access"""

    def __init__(self, db: Session):
        super().__init__(db, AuthSession)

    def create_session(
        self, token: str, user_id: UUID, expires_at: datetime
    ) -> AuthSession:
        session = AuthSession(token=token, user_id=user_id, expires_at=expires_at)
        return self.create(session)

    def get_active(self, token: str, now: datetime) -> Optional[AuthSession]:
        """Get a session by token if it has not expired"""
        return (
            self.db.query(AuthSession)
            .filter(AuthSession.token == token, AuthSession.expires_at > now)
            .first()
        )

    def delete_expired(self, now: datetime) -> int:
        """Delete every expired session"""
        count = (
            self.db.query(AuthSession)
            .filter(AuthSession.expires_at <= now)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return count
