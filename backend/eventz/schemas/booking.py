"""
Pydantic schemas for booking-related request/response validation.

`user_id`, `event_id` and the payment `price` are optional at the schema
level so the service can answer a missing value with a 400 instead of 422.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


class BookingCreate(BaseModel):
    user_id: Optional[int] = None
    event_id: Optional[int] = None
    plan: Optional[str] = Field(None, max_length=100)
    price: Decimal = Field(default=Decimal("0"), ge=0)
    guests: int = Field(default=1, gt=0)


class BookingUpdate(BaseModel):
    booking_date: date = Field(..., alias="date")
    plan: Optional[str] = Field(None, max_length=100)
    guests: int = Field(..., gt=0)

    model_config = {"populate_by_name": True}


class BookingPay(BaseModel):
    price: Optional[Decimal] = None
    coupon: Optional[str] = Field(None, max_length=50)


class BookingResponse(BaseModel):
    id: int
    user_id: int
    event_id: int
    plan: Optional[str]
    guests: int
    price: float
    list_price: float
    status: str
    booking_date: datetime
    payment_date: Optional[datetime] = None
    coupon_code: Optional[str] = None

    model_config = {"from_attributes": True}


class BookingDetailResponse(BookingResponse):
    username: Optional[str] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    event_name: Optional[str] = None
    event_date: Optional[date] = None
    city: Optional[str] = None
    venue: Optional[str] = None

    @classmethod
    def from_booking(cls, booking) -> "BookingDetailResponse":
        data = BookingResponse.model_validate(booking).model_dump()
        user = booking.user
        event = booking.event
        if user is not None:
            data.update(username=user.username, user_name=user.full_name, user_email=user.email)
        if event is not None:
            data.update(
                event_name=event.name,
                event_date=event.event_date,
                city=event.city,
                venue=event.venue,
            )
        return cls(**data)


class BookingActionResponse(BaseModel):
    success: bool = True
    message: str
    booking_id: int
