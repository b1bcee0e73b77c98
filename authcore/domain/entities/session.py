"""
Session Entity

One refresh-token session per (user, device).
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel, UniqueConstraint

from ..base import utcnow

# Device-less logins share this slot and rotate each other out.
DEFAULT_DEVICE_ID = "default"


class Session(SQLModel, table=True):
    """
    Session entity - binds a (user, device) pair to its current refresh token.

    Business Rules:
    - At most one row per (user_id, device_id)
    - Only the bcrypt hash of the refresh token is stored
    - Tokens rotate on each refresh; the previous token stops matching
    - A refresh presenting a non-matching token revokes the row
    - Login resets revoked to False
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: str = Field(nullable=False, index=True, max_length=16)
    device_id: str = Field(nullable=False, max_length=128)

    jti: str = Field(max_length=64)
    refresh_hash: str = Field(max_length=60)  # Bcrypt output
    revoked: bool = Field(default=False)
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    last_used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        UniqueConstraint("user_id", "device_id", name="uq_session_user_device"),
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_revoked", "revoked"),
    )
