"""
Account Entity

Primary money account provisioned for every new user.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow

PRIMARY_ACCOUNT_NAME = "Primary Account"


class Account(SQLModel, table=True):
    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: str = Field(nullable=False, index=True, max_length=16)
    name: str = Field(default=PRIMARY_ACCOUNT_NAME, max_length=255)
    currency: str = Field(max_length=8)
    balance: float = Field(default=0.0)
    is_primary: bool = Field(default=True)

    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )
