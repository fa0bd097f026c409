"""
Booking lifecycle service.

LIFECYCLE
=========

    CONFIRMED --agree--> AGREED --pay--> PAID
        |                  |              |
        +------------------+--------------+--cancel--> CANCELLED
    any state --approve (admin)--> APPROVED

- Create always starts at CONFIRMED; nothing moves a booking back to it.
- Agree, Cancel and Approve are unconditional single-row updates: they only
  fail when the row does not exist. Agree deliberately accepts any prior
  state, including PAID and CANCELLED.
- Cancel is idempotent. Delete is the separate path that removes the row.
- Every write is one statement followed by a commit, so a failure leaves
  the previously persisted state untouched.

PAYMENT
=======

Pay reads the booking first (404 without any write when it is missing),
validates the coupon if one was supplied and computes the discounted price
on the server from the booking's `list_price`, the undiscounted quote fixed
at creation. The caller's quoted price must match that figure; without a
coupon the quoted price is taken as is. Pay writes `price` but never
`list_price`, so repeating a successful Pay with the same coupon and quote
succeeds again instead of discounting an already discounted price.

The final UPDATE is guarded by the booking's `version` column:

    UPDATE bookings SET status = 'PAID', ..., version = version + 1
    WHERE id = :id AND version = :version_read

If another writer touched the row in between, zero rows match and the
payment is rejected with 409 instead of silently overwriting it.
"""

from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from eventz.core.clock import utcnow
from eventz.core.exceptions import (
    BookingConflictError,
    NotFoundError,
    ValidationError,
)
from eventz.core.logging import get_logger
from eventz.core.metrics import (
    booking_conflicts,
    record_booking_transition,
    record_coupon_check,
    record_db_operation,
)
from eventz.models.booking import Booking, BookingStatus
from eventz.models.event import Event
from eventz.models.user import User
from eventz.services import coupon_service

logger = get_logger(__name__)


def _detail_query():
    return (
        select(Booking)
        .options(selectinload(Booking.user), selectinload(Booking.event))
        .execution_options(populate_existing=True)
    )


async def _set_status(db: AsyncSession, booking_id: int, new_status: BookingStatus) -> None:
    result = await db.execute(
        update(Booking)
        .where(Booking.id == booking_id)
        .values(status=new_status.value, version=Booking.version + 1)
    )
    if result.rowcount == 0:
        logger.warning("booking_not_found", booking_id=booking_id, target_status=new_status.value)
        raise NotFoundError("Booking not found")

    await db.commit()
    record_db_operation("write")


async def create_booking(
    db: AsyncSession,
    user_id: Optional[int],
    event_id: Optional[int],
    plan: Optional[str],
    price: Decimal,
    guests: int,
) -> Booking:
    """Create a booking in CONFIRMED state for an existing user and event."""
    if not user_id or not event_id:
        raise ValidationError("User ID and Event ID are required")

    if await db.get(User, user_id) is None:
        raise NotFoundError(f"User {user_id} not found")
    if await db.get(Event, event_id) is None:
        raise NotFoundError(f"Event {event_id} not found")
    record_db_operation("read")

    booking = Booking(
        user_id=user_id,
        event_id=event_id,
        plan=plan,
        price=price,
        list_price=price,
        guests=guests,
        status=BookingStatus.CONFIRMED.value,
        booking_date=utcnow(),
    )
    db.add(booking)
    await db.commit()
    await db.refresh(booking)
    record_db_operation("write")
    record_booking_transition("created")

    logger.info(
        "booking_created",
        booking_id=booking.id,
        user_id=user_id,
        event_id=event_id,
        plan=plan,
        guests=guests,
    )
    return booking


async def agree_booking(db: AsyncSession, booking_id: int) -> None:
    """Mark the booking's terms as accepted. No precondition on prior state."""
    await _set_status(db, booking_id, BookingStatus.AGREED)
    record_booking_transition("agreed")
    logger.info("booking_agreed", booking_id=booking_id)


async def pay_booking(
    db: AsyncSession,
    booking_id: Optional[int],
    price: Optional[Decimal],
    coupon_code: Optional[str] = None,
) -> Booking:
    """Capture payment, optionally redeeming a coupon."""
    if not booking_id or price is None:
        raise ValidationError("Missing booking ID or price")
    if price <= 0:
        raise ValidationError("Price must be positive")

    result = await db.execute(
        select(Booking)
        .where(Booking.id == booking_id)
        .execution_options(populate_existing=True)
    )
    booking = result.scalar_one_or_none()
    record_db_operation("read")

    if booking is None:
        logger.warning("payment_failed", booking_id=booking_id, reason="not_found")
        raise NotFoundError("Booking not found")

    read_version = booking.version
    final_price = coupon_service.to_money(price)
    coupon_code = coupon_code.strip() if coupon_code else None

    if coupon_code:
        coupon = await coupon_service.get_valid_coupon(db, coupon_code)
        expected = coupon_service.apply_discount(booking.list_price, coupon.discount_percent)
        if final_price != expected:
            record_coupon_check("mismatch")
            logger.warning(
                "payment_failed",
                booking_id=booking_id,
                reason="price_mismatch",
                quoted=str(final_price),
                expected=str(expected),
            )
            raise ValidationError(
                f"Price {final_price} does not match the discounted price {expected}"
            )
        record_coupon_check("applied")
        final_price = expected

    update_result = await db.execute(
        update(Booking)
        .where(Booking.id == booking_id, Booking.version == read_version)
        .values(
            status=BookingStatus.PAID.value,
            price=final_price,
            coupon_code=coupon_code,
            payment_date=utcnow(),
            version=Booking.version + 1,
        )
    )

    if update_result.rowcount == 0:
        booking_conflicts.inc()
        await db.rollback()
        logger.warning("payment_failed", booking_id=booking_id, reason="version_conflict")
        raise BookingConflictError("Booking was modified concurrently. Please try again.")

    await db.commit()
    record_db_operation("write")
    record_booking_transition("paid")

    logger.info(
        "booking_paid",
        booking_id=booking_id,
        price=str(final_price),
        coupon=coupon_code,
    )
    return await get_booking(db, booking_id)


async def update_booking(
    db: AsyncSession,
    booking_id: int,
    booking_date: date,
    plan: Optional[str],
    guests: int,
) -> None:
    """Edit the mutable fields of a booking. Status is left alone."""
    new_date = datetime.combine(booking_date, time.min, tzinfo=timezone.utc)
    result = await db.execute(
        update(Booking)
        .where(Booking.id == booking_id)
        .values(
            booking_date=new_date,
            plan=plan,
            guests=guests,
            version=Booking.version + 1,
        )
    )
    if result.rowcount == 0:
        raise NotFoundError("Booking not found")

    await db.commit()
    record_db_operation("write")
    record_booking_transition("updated")
    logger.info("booking_updated", booking_id=booking_id, plan=plan, guests=guests)


async def cancel_booking(db: AsyncSession, booking_id: int) -> None:
    """Set status CANCELLED. Cancelling twice is not an error."""
    await _set_status(db, booking_id, BookingStatus.CANCELLED)
    record_booking_transition("cancelled")
    logger.info("booking_cancelled", booking_id=booking_id)


async def approve_booking(db: AsyncSession, booking_id: int) -> None:
    """Admin acknowledgement, reachable from any state."""
    await _set_status(db, booking_id, BookingStatus.APPROVED)
    record_booking_transition("approved")
    logger.info("booking_approved", booking_id=booking_id)


async def delete_booking(db: AsyncSession, booking_id: int) -> None:
    """Physically remove the booking row."""
    result = await db.execute(delete(Booking).where(Booking.id == booking_id))
    if result.rowcount == 0:
        raise NotFoundError("Booking not found or already deleted")

    await db.commit()
    record_db_operation("write")
    record_booking_transition("deleted")
    logger.info("booking_deleted", booking_id=booking_id)


async def get_booking(db: AsyncSession, booking_id: int) -> Booking:
    """Single booking joined with its user and event."""
    result = await db.execute(_detail_query().where(Booking.id == booking_id))
    booking = result.scalar_one_or_none()
    record_db_operation("read")

    if booking is None:
        raise NotFoundError("Booking not found")
    return booking


async def get_user_bookings(db: AsyncSession, user_id: int) -> list[Booking]:
    result = await db.execute(
        _detail_query()
        .where(Booking.user_id == user_id)
        .order_by(Booking.booking_date.desc())
    )
    return list(result.scalars().all())


async def get_bookings_by_username(db: AsyncSession, username: str) -> list[Booking]:
    result = await db.execute(
        _detail_query()
        .join(Booking.user)
        .where(User.username == username)
        .order_by(Booking.booking_date.desc())
    )
    return list(result.scalars().all())


async def list_bookings(db: AsyncSession, status: Optional[str] = None) -> list[Booking]:
    """All bookings, optionally filtered by status (case-insensitive)."""
    query = _detail_query().order_by(Booking.booking_date.desc())
    if status:
        query = query.where(Booking.status == status.upper())
    result = await db.execute(query)
    return list(result.scalars().all())
