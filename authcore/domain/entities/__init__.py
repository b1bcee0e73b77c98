"""
Domain Entities

Identity, session and account records plus their enums.
"""

from .enums import TokenKind, UserRole
from .user import User
from .session import DEFAULT_DEVICE_ID, Session
from .account import PRIMARY_ACCOUNT_NAME, Account

__all__ = [
    # Enums
    "TokenKind",
    "UserRole",
    # Entities
    "User",
    "Session",
    "Account",
    # Constants
    "DEFAULT_DEVICE_ID",
    "PRIMARY_ACCOUNT_NAME",
]
