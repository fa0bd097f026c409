from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class FeedbackCreate(BaseModel):
    user_id: Optional[int] = None
    message: str = Field(..., min_length=1, max_length=4000)


class FeedbackReply(BaseModel):
    reply: str = Field(..., min_length=1, max_length=4000)


class FeedbackResponse(BaseModel):
    id: int
    user_id: Optional[int]
    username: str
    message: str
    status: str
    created_at: datetime
