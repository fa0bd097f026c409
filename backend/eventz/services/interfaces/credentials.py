"""
Credential store interface.
Login asks a store to vouch for a username/password pair and gets back the
principal (including its role) or None.
"""

from abc import ABC, abstractmethod
from typing import Optional

from eventz.core.security import Principal


class CredentialStore(ABC):
    """
    Interface for credential stores.

    Implementations:
    - DatabaseCredentialStore: regular users, bcrypt hashes in the users table
    - ConfiguredAdminStore: admin accounts from settings.ADMIN_ACCOUNTS
    """

    @abstractmethod
    async def verify(self, username: str, password: str) -> Optional[Principal]:
        """
        Check a username/password pair.

        Returns:
            The authenticated principal, or None if the pair is not valid
            for this store.
        """
        pass
