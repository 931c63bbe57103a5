"""
Meal ledger rows: one row per user per calendar day.
"""

from sqlalchemy import (
    Column,
    Boolean,
    Date,
    TIMESTAMP,
    ForeignKey,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class FoodPurchase(Base):
    """Breakfast/dinner purchase flags for a single day"""

    __tablename__ = "food_purchases"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid,
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    date = Column(Date, nullable=False)
    breakfast = Column(Boolean, nullable=False, default=False)
    dinner = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user = relationship("AppUser", back_populates="food_purchases")

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_food_purchase_user_date"),
    )
