"""
Event model: something a user can book (a birthday, a concert, ...).
"""

from sqlalchemy import Column, Date, Index, Integer, String
from sqlalchemy.orm import relationship

from eventz.db.base import Base, TimestampMixin


class Event(Base, TimestampMixin):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(String(1000), nullable=True)
    event_date = Column(Date, nullable=False)
    city = Column(String(100), nullable=False)
    venue = Column(String(255), nullable=False)
    created_by = Column(String(100), nullable=True)

    bookings = relationship("Booking", back_populates="event", passive_deletes=True)

    __table_args__ = (
        # Index on date for listing in calendar order
        Index("ix_events_event_date", "event_date"),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, name={self.name}, date={self.event_date})>"
