"""
Booking model: a user's reservation of an event, carrying a lifecycle status.

Key design decisions:
- Status is stored as a plain string with a CHECK constraint; cancellation is
  a status change, physical deletion is a separate call path
- `version` is bumped on every lifecycle write so payment can detect a
  concurrent writer (optimistic locking, same idea as seat reservation)
- `coupon_code` is kept on the row for audit after payment
- `list_price` is the undiscounted quote set at creation; payment may lower
  `price` but never touches `list_price`, so coupon discounts are always
  computed from the same base
"""

import enum

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import relationship

from eventz.core.clock import utcnow
from eventz.db.base import Base, TimestampMixin


class BookingStatus(str, enum.Enum):
    CONFIRMED = "CONFIRMED"
    AGREED = "AGREED"
    PAID = "PAID"
    APPROVED = "APPROVED"
    CANCELLED = "CANCELLED"


_STATUS_VALUES = ", ".join(f"'{s.value}'" for s in BookingStatus)


def _default_list_price(context):
    return context.get_current_parameters().get("price") or 0


class Booking(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    plan = Column(String(100), nullable=True)
    guests = Column(Integer, nullable=False, default=1)
    price = Column(Numeric(12, 2), nullable=False, default=0)
    list_price = Column(Numeric(12, 2), nullable=False, default=_default_list_price)
    status = Column(String(20), nullable=False, default=BookingStatus.CONFIRMED.value)
    booking_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    payment_date = Column(DateTime(timezone=True), nullable=True)
    coupon_code = Column(String(50), nullable=True)

    # Optimistic locking version counter
    version = Column(Integer, nullable=False, default=1)

    # Relationships
    user = relationship("User", back_populates="bookings")
    event = relationship("Event", back_populates="bookings")

    __table_args__ = (
        CheckConstraint("guests > 0", name="check_booking_guests_positive"),
        CheckConstraint("price >= 0", name="check_booking_price_non_negative"),
        CheckConstraint("list_price >= 0", name="check_booking_list_price_non_negative"),
        CheckConstraint(f"status IN ({_STATUS_VALUES})", name="check_booking_status"),
        Index("ix_bookings_status_date", "status", "booking_date"),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, user={self.user_id}, event={self.event_id}, status={self.status})>"
