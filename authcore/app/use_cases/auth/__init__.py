"""
Authentication Use Cases

Credential and session lifecycle business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .confirm_activation_use_case import ConfirmActivationUseCase
from .resend_activation_use_case import ResendActivationUseCase
from .dtos import (
    RegisterCommand,
    RegisterResponse,
    UserSummary,
    LoginResponse,
    RefreshTokenResponse,
    LogoutResponse,
    ConfirmActivationResponse,
    ResendActivationResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "ConfirmActivationUseCase",
    "ResendActivationUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "RegisterResponse",
    "LoginResponse",
    "RefreshTokenResponse",
    "LogoutResponse",
    "ConfirmActivationResponse",
    "ResendActivationResponse",
    # DTOs - Nested Models
    "UserSummary",
]
