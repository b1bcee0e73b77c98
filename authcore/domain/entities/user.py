"""
User Entity

Identity record: credentials, activation state and profile.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow

from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - one identity record per registered email.

    Business Rules:
    - Email must be unique across all users
    - `public_id` is the handle exposed in tokens and responses; `id` never leaves storage
    - is_active stays False while an activation token is pending
    - activation_token and activation_expires_at are set and cleared together
    - Password stored as bcrypt hash
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    public_id: str = Field(unique=True, index=True, max_length=16)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    # Profile
    full_name: str = Field(max_length=255)
    age: Optional[int] = None
    occupation: Optional[str] = Field(default=None, max_length=255)
    role: UserRole = Field(default=UserRole.user)
    primary_currency: str = Field(default="MXN", max_length=8)
    active_account_id: Optional[str] = Field(default=None, max_length=64)

    # Account activation
    is_active: bool = Field(default=False)
    activation_token: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=128
    )
    activation_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )

    # Password reset OTP (owned by the reset flow, never written here)
    reset_code: Optional[str] = Field(default=None, max_length=16)
    reset_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_is_active", "is_active"),)
