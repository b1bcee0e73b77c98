"""
Use Cases

Organized into domain folders:
- auth/: Credential and session lifecycle
"""

from .auth import (
    RegisterUseCase,
    RegisterCommand,
    LoginUseCase,
    RefreshTokenUseCase,
    LogoutUseCase,
    ConfirmActivationUseCase,
    ResendActivationUseCase,
)

__all__ = [
    "RegisterUseCase",
    "RegisterCommand",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "ConfirmActivationUseCase",
    "ResendActivationUseCase",
]
