from datetime import date, datetime
from pydantic import BaseModel, Field


class CouponCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=50)
    discount_percent: int = Field(..., ge=0, le=100)
    usage_limit: int = Field(default=0, ge=0)
    expires_at: date
    created_by: str = Field(default="admin", max_length=100)


class CouponResponse(BaseModel):
    id: int
    code: str
    discount_percent: int
    usage_limit: int
    expires_at: date
    created_by: str
    created_at: datetime

    model_config = {"from_attributes": True}
