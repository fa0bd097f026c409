"""
Feedback submission and admin replies.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from eventz.core.clock import utcnow
from eventz.core.exceptions import NotFoundError
from eventz.core.logging import get_logger
from eventz.models.feedback import FEEDBACK_REPLIED, Feedback
from eventz.models.user import User
from eventz.schemas.feedback import FeedbackResponse

logger = get_logger(__name__)

ANONYMOUS = "Anonymous"


def _to_response(feedback: Feedback) -> FeedbackResponse:
    return FeedbackResponse(
        id=feedback.id,
        user_id=feedback.user_id,
        username=feedback.user.username if feedback.user is not None else ANONYMOUS,
        message=feedback.message,
        status=feedback.status,
        created_at=feedback.created_at,
    )


async def submit_feedback(db: AsyncSession, user_id: Optional[int], message: str) -> Feedback:
    if user_id is not None and await db.get(User, user_id) is None:
        raise NotFoundError(f"User {user_id} not found")

    feedback = Feedback(user_id=user_id, message=message)
    db.add(feedback)
    await db.commit()
    await db.refresh(feedback)

    logger.info("feedback_submitted", feedback_id=feedback.id, user_id=user_id)
    return feedback


async def list_feedback(db: AsyncSession) -> list[FeedbackResponse]:
    result = await db.execute(
        select(Feedback)
        .options(selectinload(Feedback.user))
        .order_by(Feedback.created_at.desc(), Feedback.id.desc())
    )
    return [_to_response(f) for f in result.scalars().all()]


async def reply_to_feedback(db: AsyncSession, feedback_id: int, reply: str) -> Feedback:
    """Append a timestamped reply block to the message and mark it REPLIED."""
    feedback = await db.get(Feedback, feedback_id)
    if feedback is None:
        raise NotFoundError("Feedback not found.")

    header = f"--- Reply ({utcnow().strftime('%Y-%m-%d %H:%M')}) ---"
    block = f"{header}\n{reply}"
    feedback.message = f"{feedback.message}\n{block}" if feedback.message else block
    feedback.status = FEEDBACK_REPLIED
    await db.commit()

    logger.info("feedback_replied", feedback_id=feedback_id)
    return feedback
