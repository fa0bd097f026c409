"""
Coupon lookup, expiry validation and discount arithmetic, plus the admin
CRUD operations.

Coupons are valid through the end of their expiry date (UTC). Codes are
not unique in the table; when several rows share a code the newest one
wins.
"""

from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventz.core.clock import today
from eventz.core.exceptions import CouponExpiredError, NotFoundError
from eventz.core.logging import get_logger
from eventz.core.metrics import record_coupon_check, record_db_operation
from eventz.models.coupon import Coupon
from eventz.schemas.coupon import CouponCreate

logger = get_logger(__name__)

CENTS = Decimal("0.01")


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def apply_discount(price, discount_percent: int) -> Decimal:
    """price * (1 - discount_percent / 100), rounded to cents."""
    base = Decimal(str(price))
    return to_money(base * (Decimal(100) - Decimal(discount_percent)) / Decimal(100))


def is_expired(coupon: Coupon) -> bool:
    return coupon.expires_at < today()


async def get_valid_coupon(db: AsyncSession, code: str) -> Coupon:
    """
    Look up a coupon by code and make sure it can still be redeemed.
    Raises NotFoundError for unknown codes and CouponExpiredError past expiry.
    """
    result = await db.execute(
        select(Coupon)
        .where(Coupon.code == code)
        .order_by(Coupon.created_at.desc(), Coupon.id.desc())
        .limit(1)
    )
    coupon = result.scalar_one_or_none()
    record_db_operation("read")

    if coupon is None:
        record_coupon_check("unknown")
        logger.warning("coupon_not_found", code=code)
        raise NotFoundError(f"Coupon '{code}' not found")

    if is_expired(coupon):
        record_coupon_check("expired")
        logger.warning("coupon_expired", code=code, expires_at=str(coupon.expires_at))
        raise CouponExpiredError(f"Coupon '{code}' expired on {coupon.expires_at.isoformat()}")

    return coupon


async def list_coupons(db: AsyncSession) -> list[Coupon]:
    result = await db.execute(select(Coupon).order_by(Coupon.created_at.desc(), Coupon.id.desc()))
    return list(result.scalars().all())


async def create_coupon(db: AsyncSession, data: CouponCreate) -> Coupon:
    coupon = Coupon(
        code=data.code,
        discount_percent=data.discount_percent,
        usage_limit=data.usage_limit,
        expires_at=data.expires_at,
        created_by=data.created_by,
    )
    db.add(coupon)
    await db.commit()
    await db.refresh(coupon)
    record_db_operation("write")

    logger.info("coupon_created", coupon_id=coupon.id, code=coupon.code, discount=coupon.discount_percent)
    return coupon


async def delete_coupon(db: AsyncSession, coupon_id: int) -> None:
    result = await db.execute(delete(Coupon).where(Coupon.id == coupon_id))
    if result.rowcount == 0:
        raise NotFoundError("Coupon not found")
    await db.commit()
    record_db_operation("write")
    logger.info("coupon_deleted", coupon_id=coupon_id)
