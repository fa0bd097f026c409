"""
Pydantic schemas for event-related request/response validation.
"""

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field


class EventCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    event_date: date
    city: str = Field(..., min_length=1, max_length=100)
    venue: str = Field(..., min_length=1, max_length=255)
    created_by: Optional[str] = Field(None, max_length=100)


class EventResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    event_date: date
    city: str
    venue: str
    created_by: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}


class EventIdResponse(BaseModel):
    event_id: int
