"""
User profile reads and edits, plus the admin user management operations.

Email stays unique across accounts: an edit that would reuse another
account's address is a 409, checked before the write.
"""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventz.core.exceptions import ConflictError, NotFoundError
from eventz.core.logging import get_logger
from eventz.core.metrics import record_db_operation
from eventz.models.user import User

logger = get_logger(__name__)


async def _ensure_email_free(db: AsyncSession, email: str, owner_id: int) -> None:
    result = await db.execute(select(User.id).where(User.email == email, User.id != owner_id))
    if result.first() is not None:
        logger.warning("user_update_failed", reason="email_exists", user_id=owner_id)
        raise ConflictError("Email already registered")


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.id))
    record_db_operation("read")
    return list(result.scalars().all())


async def get_user_by_username(db: AsyncSession, username: str) -> User:
    result = await db.execute(
        select(User)
        .where(User.username == username.strip())
        .execution_options(populate_existing=True)
    )
    user = result.scalar_one_or_none()
    record_db_operation("read")

    if user is None:
        raise NotFoundError("User not found")
    return user


async def update_user(db: AsyncSession, user_id: int, full_name: str, email: str) -> User:
    """Admin edit of name and email."""
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")

    await _ensure_email_free(db, email, user_id)

    user.full_name = full_name
    user.email = email
    await db.commit()
    record_db_operation("write")

    logger.info("user_updated", user_id=user_id)
    return user


async def update_profile(
    db: AsyncSession,
    username: str,
    full_name: str,
    email: str,
    phone: Optional[str],
) -> User:
    """Self-service edit of name, email and phone."""
    user = await get_user_by_username(db, username)
    await _ensure_email_free(db, email, user.id)

    user.full_name = full_name
    user.email = email
    user.phone = phone
    await db.commit()
    record_db_operation("write")

    logger.info("profile_updated", user_id=user.id)
    return user


async def delete_user(db: AsyncSession, user_id: int) -> None:
    """Remove the account; its bookings go with it through the FK cascade."""
    result = await db.execute(delete(User).where(User.id == user_id))
    if result.rowcount == 0:
        raise NotFoundError("User not found")

    await db.commit()
    record_db_operation("write")
    logger.info("user_deleted", user_id=user_id)
