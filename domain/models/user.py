"""
User and login session models.
"""

from sqlalchemy import Column, Text, TIMESTAMP, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class AppUser(Base):
    """User account model"""

    __tablename__ = "app_user"

    user_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(Text, unique=True, nullable=False)
    full_name = Column(Text)
    password_hash = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    sessions = relationship(
        "AuthSession", back_populates="user", cascade="all, delete-orphan"
    )
    food_purchases = relationship(
        "FoodPurchase", back_populates="user", cascade="all, delete-orphan"
    )


class AuthSession(Base):
    """Opaque bearer token issued at login"""

    __tablename__ = "auth_session"

    token = Column(Text, primary_key=True)
    user_id = Column(
        Uuid,
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    expires_at = Column(DateTime, nullable=False)  # naive UTC

    user = relationship("AppUser", back_populates="sessions")
