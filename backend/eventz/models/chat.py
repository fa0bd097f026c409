from sqlalchemy import Column, DateTime, Index, Integer, String

from eventz.core.clock import utcnow
from eventz.db.base import Base


class ChatMessage(Base):
    __tablename__ = "chat_messages"

    id = Column(Integer, primary_key=True, index=True)
    coordinator_id = Column(Integer, nullable=False)
    sender = Column(String(100), nullable=False)
    message = Column(String(2000), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("ix_chat_messages_coordinator_created", "coordinator_id", "created_at"),
    )
