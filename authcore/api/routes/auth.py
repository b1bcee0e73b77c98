from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from authcore.api.error import ClientError, ServerError
from authcore.app.services.email_sender import IEmailSender
from authcore.app.services.password_hasher import IPasswordHasher
from authcore.app.services.token_codec import ITokenCodec
from authcore.app.services.unit_of_work import UnitOfWork
from authcore.app.use_cases.auth import (
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    LoginUseCase,
    RefreshTokenUseCase,
    LogoutUseCase,
    ConfirmActivationUseCase,
    ResendActivationUseCase,
    LoginResponse,
    RefreshTokenResponse,
    LogoutResponse,
    ConfirmActivationResponse,
    ResendActivationResponse,
)
from authcore.depends import (
    ACTIVATION_TTL,
    SESSION_TTL,
    get_current_user,
    get_email_sender,
    get_password_hasher,
    get_token_codec,
    get_unit_of_work,
)
from config import ApplicationConfig

router = APIRouter(prefix="/auth", tags=["Authentication"])

UNAUTHENTICATED_CODES = (
    "ACCOUNT_NOT_FOUND",
    "INVALID_CREDENTIALS",
    "ACCOUNT_NOT_ACTIVATED",
    "INVALID_TOKEN",
    "INVALID_SESSION",
    "SESSION_EXPIRED",
    "SESSION_COMPROMISED",
)
ACTIVATION_ERROR_CODES = ("ACTIVATION_INVALID", "ACTIVATION_EXPIRED", "ACTIVATION_FAILED")


def raise_for_error(error):
    if error.code in UNAUTHENTICATED_CODES:
        raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
    if error.code in ACTIVATION_ERROR_CODES or error.code in (
        "EMAIL_ALREADY_EXISTS",
        "PASSWORD_MISMATCH",
    ):
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    if error.code == "NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise ServerError(error)


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=6, max_length=32)
    confirm_password: str = Field(..., min_length=6, max_length=32)
    full_name: str = Field(..., min_length=1, max_length=255)
    age: int = Field(..., ge=13, le=100)
    occupation: str = Field(..., min_length=1, max_length=255)
    currency: Optional[str] = Field(
        default=None, min_length=3, max_length=8, description="Primary account currency"
    )


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: IPasswordHasher = Depends(get_password_hasher),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Register

    Creates an inactive account and emails an activation link.

    Raises:
        - 400 Bad Request: Email already registered or passwords differ
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = RegisterCommand(
        email=request.email,
        password=request.password,
        confirm_password=request.confirm_password,
        full_name=request.full_name,
        age=request.age,
        occupation=request.occupation,
        currency=request.currency,
    )

    use_case = RegisterUseCase(
        uow,
        hasher,
        email_sender,
        activation_ttl=ACTIVATION_TTL,
        default_currency=ApplicationConfig.DEFAULT_CURRENCY,
        email_timeout=ApplicationConfig.EMAIL_SEND_TIMEOUT_SECONDS,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    device_id: Optional[str] = Field(
        default=None,
        max_length=128,
        description='Client device id. Omitted ids share the "default" session slot.',
    )


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: IPasswordHasher = Depends(get_password_hasher),
    codec: ITokenCodec = Depends(get_token_codec),
):
    """
    Login

    Raises:
        - 401 Unauthorized: ACCOUNT_NOT_FOUND, INVALID_CREDENTIALS, ACCOUNT_NOT_ACTIVATED
    """
    use_case = LoginUseCase(uow, hasher, codec, session_ttl=SESSION_TTL)
    result = await use_case.execute(request.email, request.password, request.device_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., description="Refresh token")
    device_id: str = Field(..., max_length=128, description="Device the session belongs to")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse)
async def refresh(
    request: RefreshRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: IPasswordHasher = Depends(get_password_hasher),
    codec: ITokenCodec = Depends(get_token_codec),
):
    """
    Refresh Tokens

    Rotates the refresh token. Presenting a superseded token revokes the
    device session. A token issued to a different device than `device_id`
    is rejected with INVALID_SESSION and leaves both sessions untouched.

    Raises:
        - 401 Unauthorized: INVALID_TOKEN, INVALID_SESSION, SESSION_EXPIRED, SESSION_COMPROMISED
    """
    use_case = RefreshTokenUseCase(uow, hasher, codec, session_ttl=SESSION_TTL)
    result = await use_case.execute(request.refresh_token, request.device_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LogoutRequest(BaseModel):
    device_id: Optional[str] = Field(
        default=None, max_length=128, description="Defaults to the token's device"
    )


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    request: LogoutRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout

    Revokes the session of one device. Always succeeds for an authenticated caller.
    """
    device_id = request.device_id or current_user["device_id"]

    use_case = LogoutUseCase(uow)
    result = await use_case.execute(current_user["sub"], device_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/confirm", status_code=status.HTTP_200_OK, response_model=ConfirmActivationResponse
)
async def confirm(
    token: str = Query(..., min_length=1, description="Activation token"),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Confirm Account Activation

    Raises:
        - 400 Bad Request: ACTIVATION_INVALID, ACTIVATION_EXPIRED, ACTIVATION_FAILED
    """
    result = await ConfirmActivationUseCase(uow).execute(token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ResendActivationRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/resend-activation",
    status_code=status.HTTP_200_OK,
    response_model=ResendActivationResponse,
)
async def resend_activation(
    request: ResendActivationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Resend Activation Email

    Security:
        - No email enumeration (same response for unknown emails)
    """
    use_case = ResendActivationUseCase(
        uow,
        email_sender,
        activation_ttl=ACTIVATION_TTL,
        email_timeout=ApplicationConfig.EMAIL_SEND_TIMEOUT_SECONDS,
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
