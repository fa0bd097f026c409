from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventz.db.session import get_db
from eventz.schemas.feedback import FeedbackCreate
from eventz.services.feedback_service import submit_feedback

router = APIRouter(prefix="/feedback", tags=["Feedback"])


@router.post("/", status_code=status.HTTP_201_CREATED)
async def submit(data: FeedbackCreate, db: AsyncSession = Depends(get_db)):
    feedback = await submit_feedback(db, data.user_id, data.message)
    return {"success": True, "message": "Thanks for your feedback!", "feedback_id": feedback.id}
