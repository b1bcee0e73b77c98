"""
Authentication Use Case DTOs (Data Transfer Objects)

Command and Response classes for the credential lifecycle.
Provides type safety and clear contracts between layers.
"""

from typing import Optional
from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    Password equality is re-checked by the use case.
    """

    email: str
    password: str
    confirm_password: str
    full_name: str
    age: int
    occupation: str
    currency: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class RegisterResponse(BaseModel):
    """Response for register use case"""

    user_id: str
    message: str


class UserSummary(BaseModel):
    """User information in login responses"""

    id: str
    email: str
    full_name: str
    role: str


class LoginResponse(BaseModel):
    """Response for user login use case"""

    access_token: str
    refresh_token: str
    device_id: str
    user: UserSummary


class RefreshTokenResponse(BaseModel):
    """Response for refresh token use case"""

    access_token: str
    refresh_token: str


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    status: str
    message: str


class ConfirmActivationResponse(BaseModel):
    """Response for account activation use case"""

    status: str
    message: str


class ResendActivationResponse(BaseModel):
    """Response for resend activation email use case"""

    status: str
    message: str
