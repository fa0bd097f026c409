"""
User feedback. Admin replies are appended to the message body.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from eventz.core.clock import utcnow
from eventz.db.base import Base

FEEDBACK_NEW = "NEW"
FEEDBACK_REPLIED = "REPLIED"


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    message = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default=FEEDBACK_NEW)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("User")
