"""
Coordinator chat. Every user message gets a canned coordinator reply until
a human picks the conversation up.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventz.core.clock import utcnow
from eventz.core.logging import get_logger
from eventz.models.chat import ChatMessage

logger = get_logger(__name__)

COORDINATOR_SENDER = "coordinator"
AUTO_REPLY = "Thanks for your message! We'll get back to you soon."


async def list_messages(db: AsyncSession, coordinator_id: int) -> list[ChatMessage]:
    result = await db.execute(
        select(ChatMessage)
        .where(ChatMessage.coordinator_id == coordinator_id)
        .order_by(ChatMessage.created_at.asc(), ChatMessage.id.asc())
    )
    return list(result.scalars().all())


async def post_message(
    db: AsyncSession,
    coordinator_id: int,
    sender: str,
    message: str,
) -> list[ChatMessage]:
    """Store the user's message and the auto-reply; returns both."""
    now = utcnow()
    posted = ChatMessage(coordinator_id=coordinator_id, sender=sender, message=message, created_at=now)
    reply = ChatMessage(
        coordinator_id=coordinator_id,
        sender=COORDINATOR_SENDER,
        message=AUTO_REPLY,
        created_at=now,
    )
    db.add(posted)
    await db.flush()
    db.add(reply)
    await db.commit()

    logger.info("chat_message_posted", coordinator_id=coordinator_id, sender=sender)
    return [posted, reply]
