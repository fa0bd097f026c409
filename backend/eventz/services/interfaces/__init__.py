"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .credentials import CredentialStore

__all__ = ['CredentialStore']
