"""
Booking lifecycle endpoints: create, agree, pay, edit, cancel, delete and
the per-user read views.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventz.db.session import get_db
from eventz.schemas.booking import (
    BookingActionResponse,
    BookingCreate,
    BookingDetailResponse,
    BookingPay,
    BookingResponse,
    BookingUpdate,
)
from eventz.services import booking_service
from eventz.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(booking_data: BookingCreate, db: AsyncSession = Depends(get_db)):
    """Create a booking in CONFIRMED state."""
    return await booking_service.create_booking(
        db,
        user_id=booking_data.user_id,
        event_id=booking_data.event_id,
        plan=booking_data.plan,
        price=booking_data.price,
        guests=booking_data.guests,
    )


@router.get("/user/{user_id}", response_model=list[BookingDetailResponse])
async def list_user_bookings(user_id: int, db: AsyncSession = Depends(get_db)):
    """All bookings of a user, newest booking date first."""
    bookings = await booking_service.get_user_bookings(db, user_id)
    return [BookingDetailResponse.from_booking(b) for b in bookings]


@router.get("/username/{username}", response_model=list[BookingDetailResponse])
async def list_bookings_by_username(username: str, db: AsyncSession = Depends(get_db)):
    bookings = await booking_service.get_bookings_by_username(db, username)
    return [BookingDetailResponse.from_booking(b) for b in bookings]


@router.get("/{booking_id}", response_model=BookingDetailResponse)
async def get_booking(booking_id: int, db: AsyncSession = Depends(get_db)):
    booking = await booking_service.get_booking(db, booking_id)
    return BookingDetailResponse.from_booking(booking)


@router.put("/{booking_id}/agree", response_model=BookingActionResponse)
async def agree_booking(booking_id: int, db: AsyncSession = Depends(get_db)):
    await booking_service.agree_booking(db, booking_id)
    return BookingActionResponse(message="Agreement confirmed", booking_id=booking_id)


@router.post("/{booking_id}/pay", response_model=BookingDetailResponse)
async def pay_booking(booking_id: int, payment: BookingPay, db: AsyncSession = Depends(get_db)):
    """
    Confirm payment. With a coupon the server recomputes the discounted
    price and rejects a quote that does not match it.
    """
    booking = await booking_service.pay_booking(db, booking_id, payment.price, payment.coupon)
    return BookingDetailResponse.from_booking(booking)


@router.put("/{booking_id}", response_model=BookingActionResponse)
async def update_booking(
    booking_id: int,
    changes: BookingUpdate,
    db: AsyncSession = Depends(get_db),
):
    await booking_service.update_booking(
        db,
        booking_id,
        booking_date=changes.booking_date,
        plan=changes.plan,
        guests=changes.guests,
    )
    return BookingActionResponse(message="Booking updated", booking_id=booking_id)


@router.post("/{booking_id}/cancel", response_model=BookingActionResponse)
async def cancel_booking(booking_id: int, db: AsyncSession = Depends(get_db)):
    """Mark the booking CANCELLED. Safe to call more than once."""
    await booking_service.cancel_booking(db, booking_id)
    return BookingActionResponse(message="Booking cancelled", booking_id=booking_id)


@router.delete("/{booking_id}", response_model=BookingActionResponse)
async def delete_booking(booking_id: int, db: AsyncSession = Depends(get_db)):
    """Remove the booking row entirely."""
    await booking_service.delete_booking(db, booking_id)
    return BookingActionResponse(message="Booking deleted", booking_id=booking_id)
