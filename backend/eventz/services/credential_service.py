"""
Credential store implementations and the factory that picks one for a
login attempt.

Admin accounts used to be a static list inside the login handler; they now
come from configuration (username -> bcrypt hash) behind the same interface
as regular users, so neither the route nor the auth service knows where a
role comes from.
"""

from typing import Mapping, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventz.core.config import get_settings
from eventz.core.logging import get_logger
from eventz.core.security import ROLE_ADMIN, ROLE_USER, Principal, verify_password
from eventz.models.user import User
from eventz.services.interfaces.credentials import CredentialStore

logger = get_logger(__name__)

# Admins are not rows in the users table
ADMIN_USER_ID = 0


class DatabaseCredentialStore(CredentialStore):
    """Regular users, looked up by username."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def verify(self, username: str, password: str) -> Optional[Principal]:
        result = await self.db.execute(
            select(User)
            .where(User.username == username)
            .execution_options(populate_existing=True)
        )
        user = result.scalar_one_or_none()

        if user is None or not verify_password(password, user.hashed_password):
            return None

        if not user.is_active:
            return None

        return Principal(
            user_id=user.id,
            username=user.username,
            role=ROLE_USER,
            full_name=user.full_name,
        )


class ConfiguredAdminStore(CredentialStore):
    """Admin accounts from settings.ADMIN_ACCOUNTS."""

    def __init__(self, accounts: Mapping[str, str]):
        self.accounts = dict(accounts)

    async def verify(self, username: str, password: str) -> Optional[Principal]:
        hashed = self.accounts.get(username)
        if hashed is None or not verify_password(password, hashed):
            return None

        return Principal(
            user_id=ADMIN_USER_ID,
            username=username,
            role=ROLE_ADMIN,
            full_name=username,
        )


def get_credential_store(role: str, db: AsyncSession) -> CredentialStore:
    """Pick the store that owns accounts of the requested role."""
    if role == ROLE_ADMIN:
        return ConfiguredAdminStore(get_settings().ADMIN_ACCOUNTS)
    return DatabaseCredentialStore(db)
