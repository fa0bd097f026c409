"""
Password reset OTPs: issue -> validate within TTL -> consume once.

- One live token per identifier (the username or email the user typed).
  Issuing again replaces the previous token in one commit, so the latest
  code wins.
- Validation does not consume the token. Reset validates, stores the new
  password hash and then deletes the token.
- An expired token is deleted (and committed) when it is detected, before
  the error reaches the caller.
"""

import secrets
from datetime import timedelta
from typing import Optional

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from eventz.core.clock import ensure_utc, utcnow
from eventz.core.config import get_settings
from eventz.core.exceptions import ExpiredError, InvalidTokenError, NotFoundError
from eventz.core.logging import get_logger
from eventz.core.metrics import record_db_operation, record_otp_event
from eventz.core.security import hash_password
from eventz.models.otp import PasswordOtp
from eventz.models.user import User
from eventz.services.auth_service import find_user_by_identifier

logger = get_logger(__name__)


def generate_otp_code(length: int = 6) -> str:
    """Uniformly random numeric code without a leading zero."""
    low = 10 ** (length - 1)
    return str(low + secrets.randbelow(9 * low))


def _normalize(code: str) -> str:
    return str(code).strip().casefold()


async def issue_otp(db: AsyncSession, identifier: str) -> PasswordOtp:
    """Create a fresh OTP for a known username or email."""
    settings = get_settings()

    if await find_user_by_identifier(db, identifier) is None:
        logger.warning("otp_issue_failed", identifier=identifier, reason="unknown_user")
        raise NotFoundError("User not found")

    # Delete and insert commit together; a failed insert keeps the previous token
    await db.execute(delete(PasswordOtp).where(PasswordOtp.user_input == identifier))
    token = PasswordOtp(
        user_input=identifier,
        otp=generate_otp_code(settings.OTP_LENGTH),
        expires_at=utcnow() + timedelta(minutes=settings.OTP_TTL_MINUTES),
    )
    db.add(token)
    await db.commit()
    record_db_operation("write")
    record_otp_event("issued")

    logger.info("otp_issued", identifier=identifier, ttl_minutes=settings.OTP_TTL_MINUTES)
    return token


async def _get_token(db: AsyncSession, identifier: str) -> Optional[PasswordOtp]:
    result = await db.execute(
        select(PasswordOtp)
        .where(PasswordOtp.user_input == identifier)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def validate_otp(db: AsyncSession, identifier: str, code: str) -> PasswordOtp:
    """Check a code against the stored token without consuming it."""
    token = await _get_token(db, identifier)
    record_db_operation("read")

    if token is None:
        record_otp_event("invalid")
        logger.warning("otp_invalid", identifier=identifier, reason="no_token")
        raise InvalidTokenError("Invalid or expired OTP.")

    if utcnow() > ensure_utc(token.expires_at):
        await consume_otp(db, identifier)
        record_otp_event("expired")
        logger.warning("otp_expired", identifier=identifier)
        raise ExpiredError("OTP expired. Request a new one.")

    if _normalize(code) != _normalize(token.otp):
        record_otp_event("invalid")
        logger.warning("otp_invalid", identifier=identifier, reason="mismatch")
        raise InvalidTokenError("Invalid OTP.")

    record_otp_event("validated")
    return token


async def consume_otp(db: AsyncSession, identifier: str) -> None:
    await db.execute(delete(PasswordOtp).where(PasswordOtp.user_input == identifier))
    await db.commit()
    record_db_operation("write")
    record_otp_event("consumed")


async def reset_password(db: AsyncSession, identifier: str, code: str, new_password: str) -> None:
    """Validate the OTP, store the new password, then burn the token."""
    await validate_otp(db, identifier, code)

    result = await db.execute(
        update(User)
        .where(or_(User.username == identifier, User.email == identifier))
        .values(hashed_password=hash_password(new_password))
    )
    if result.rowcount == 0:
        logger.warning("password_reset_failed", identifier=identifier, reason="account_gone")
        raise NotFoundError("User not found.")
    await db.commit()
    record_db_operation("write")

    await consume_otp(db, identifier)
    logger.info("password_reset", identifier=identifier)
