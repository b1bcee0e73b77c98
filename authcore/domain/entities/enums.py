"""
Domain Enums

Enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Account role carried in access tokens"""

    user = "user"
    admin = "admin"


class TokenKind(str, Enum):
    """Discriminator stored in the `typ` claim of every issued token"""

    access = "access"
    refresh = "refresh"
