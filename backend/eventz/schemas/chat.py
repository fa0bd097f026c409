from datetime import datetime
from pydantic import BaseModel, Field


class ChatMessageCreate(BaseModel):
    sender: str = Field(..., min_length=1, max_length=100)
    message: str = Field(..., min_length=1, max_length=2000)


class ChatMessageResponse(BaseModel):
    sender: str
    message: str
    created_at: datetime

    model_config = {"from_attributes": True}
