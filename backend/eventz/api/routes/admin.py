"""
Admin endpoints: booking moderation, coupons, user management, event
removal and feedback replies. Every route requires an admin token.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventz.core.security import require_admin
from eventz.db.session import get_db
from eventz.schemas.booking import BookingActionResponse, BookingDetailResponse
from eventz.schemas.coupon import CouponCreate, CouponResponse
from eventz.schemas.feedback import FeedbackReply, FeedbackResponse
from eventz.schemas.user import UserAdminUpdate, UserSummary
from eventz.services import booking_service, coupon_service, event_service, feedback_service, user_service

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


@router.get("/bookings", response_model=list[BookingDetailResponse])
async def list_all_bookings(db: AsyncSession = Depends(get_db)):
    bookings = await booking_service.list_bookings(db)
    return [BookingDetailResponse.from_booking(b) for b in bookings]


@router.get("/bookings/status/{booking_status}", response_model=list[BookingDetailResponse])
async def list_bookings_by_status(booking_status: str, db: AsyncSession = Depends(get_db)):
    bookings = await booking_service.list_bookings(db, status=booking_status)
    return [BookingDetailResponse.from_booking(b) for b in bookings]


@router.put("/bookings/{booking_id}/approve", response_model=BookingActionResponse)
async def approve_booking(booking_id: int, db: AsyncSession = Depends(get_db)):
    await booking_service.approve_booking(db, booking_id)
    return BookingActionResponse(message="Booking approved successfully.", booking_id=booking_id)


@router.put("/bookings/{booking_id}/cancel", response_model=BookingActionResponse)
async def cancel_booking(booking_id: int, db: AsyncSession = Depends(get_db)):
    await booking_service.cancel_booking(db, booking_id)
    return BookingActionResponse(message="Booking cancelled successfully.", booking_id=booking_id)


@router.get("/coupons", response_model=list[CouponResponse])
async def list_coupons(db: AsyncSession = Depends(get_db)):
    return await coupon_service.list_coupons(db)


@router.post("/coupons", response_model=CouponResponse, status_code=status.HTTP_201_CREATED)
async def create_coupon(data: CouponCreate, db: AsyncSession = Depends(get_db)):
    return await coupon_service.create_coupon(db, data)


@router.delete("/coupons/{coupon_id}")
async def delete_coupon(coupon_id: int, db: AsyncSession = Depends(get_db)):
    await coupon_service.delete_coupon(db, coupon_id)
    return {"success": True, "message": "Coupon deleted successfully."}


@router.delete("/events/{event_id}")
async def delete_event(event_id: int, db: AsyncSession = Depends(get_db)):
    await event_service.delete_event(db, event_id)
    return {"success": True, "message": "Event deleted successfully."}


@router.get("/feedback", response_model=list[FeedbackResponse])
async def list_feedback(db: AsyncSession = Depends(get_db)):
    return await feedback_service.list_feedback(db)


@router.post("/feedback/{feedback_id}/reply")
async def reply_to_feedback(feedback_id: int, data: FeedbackReply, db: AsyncSession = Depends(get_db)):
    await feedback_service.reply_to_feedback(db, feedback_id, data.reply)
    return {"success": True, "message": "Reply added successfully."}


@router.get("/users", response_model=list[UserSummary])
async def list_users(db: AsyncSession = Depends(get_db)):
    return await user_service.list_users(db)


@router.put("/users/{user_id}", response_model=UserSummary)
async def update_user(user_id: int, data: UserAdminUpdate, db: AsyncSession = Depends(get_db)):
    return await user_service.update_user(db, user_id, full_name=data.full_name, email=data.email)


@router.delete("/users/{user_id}")
async def delete_user(user_id: int, db: AsyncSession = Depends(get_db)):
    await user_service.delete_user(db, user_id)
    return {"success": True, "message": "User deleted successfully."}
