"""
Authentication service handling user registration, login and password changes.
"""

from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventz.models.user import User
from eventz.schemas.user import PasswordChange, Token, UserCreate, UserLogin
from eventz.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from eventz.core.security import hash_password, token_for, verify_password
from eventz.core.logging import get_logger
from eventz.services.credential_service import get_credential_store

logger = get_logger(__name__)


async def register_user(db: AsyncSession, user_data: UserCreate) -> User:
    """
    Register a new user with hashed password.
    Raises 409 if email or username already exists.
    """
    result = await db.execute(select(User).where(User.email == user_data.email))
    if result.scalar_one_or_none():
        logger.warning("registration_failed", reason="email_exists", email=user_data.email)
        raise ConflictError("Email already registered")

    result = await db.execute(select(User).where(User.username == user_data.username))
    if result.scalar_one_or_none():
        logger.warning("registration_failed", reason="username_exists", username=user_data.username)
        raise ConflictError("Username already taken")

    user = User(
        full_name=user_data.full_name,
        email=user_data.email,
        username=user_data.username,
        phone=user_data.phone,
        hashed_password=hash_password(user_data.password),
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)

    logger.info("user_registered", user_id=user.id, username=user.username)
    return user


async def authenticate_user(db: AsyncSession, login_data: UserLogin) -> Token:
    """
    Authenticate against the credential store for the requested role and
    return a JWT access token. Raises 401 if credentials are invalid.
    """
    store = get_credential_store(login_data.role, db)
    principal = await store.verify(login_data.username, login_data.password)

    if principal is None:
        logger.warning("login_failed", username=login_data.username, role=login_data.role)
        raise AuthenticationError(f"Invalid {login_data.role} credentials")

    logger.info("user_logged_in", user_id=principal.user_id, role=principal.role)
    return Token(
        access_token=token_for(principal),
        role=principal.role,
        username=principal.username,
        user_id=principal.user_id,
        full_name=principal.full_name,
    )


async def find_user_by_identifier(db: AsyncSession, identifier: str) -> Optional[User]:
    """Resolve a user by username or email."""
    result = await db.execute(
        select(User).where(or_(User.username == identifier, User.email == identifier))
    )
    return result.scalars().first()


async def change_password(db: AsyncSession, user_id: int, data: PasswordChange) -> None:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")

    if not verify_password(data.current_password, user.hashed_password):
        logger.warning("password_change_failed", user_id=user_id)
        raise AuthenticationError("Current password is incorrect")

    user.hashed_password = hash_password(data.new_password)
    await db.commit()
    logger.info("password_changed", user_id=user_id)
