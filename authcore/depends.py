from datetime import timedelta

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from authcore.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from authcore.adapter.services.jwt_token_codec import JwtTokenCodec, TokenCodecConfig
from authcore.adapter.services.smtp_email_sender import SmtpEmailSender
from authcore.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from authcore.app.services.email_sender import IEmailSender
from authcore.app.services.password_hasher import IPasswordHasher
from authcore.app.services.token_codec import ITokenCodec
from authcore.domain.entities import TokenKind

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()

_password_hasher = BcryptPasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)
_token_codec = JwtTokenCodec(TokenCodecConfig.from_application_config(ApplicationConfig))
_email_sender = SmtpEmailSender(
    activation_url_base=ApplicationConfig.ACTIVATION_URL_BASE,
    smtp_host=ApplicationConfig.SMTP_HOST,
    smtp_port=ApplicationConfig.SMTP_PORT,
    smtp_user=ApplicationConfig.SMTP_USER,
    smtp_password=ApplicationConfig.SMTP_PASSWORD,
    smtp_use_tls=ApplicationConfig.SMTP_USE_TLS,
    from_email=ApplicationConfig.SMTP_FROM_EMAIL,
    timeout=ApplicationConfig.EMAIL_SEND_TIMEOUT_SECONDS,
)

ACTIVATION_TTL = timedelta(minutes=ApplicationConfig.ACTIVATION_TOKEN_TTL_MINUTES)
SESSION_TTL = timedelta(days=ApplicationConfig.REFRESH_TOKEN_TTL_DAYS)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_password_hasher() -> IPasswordHasher:
    return _password_hasher


def get_token_codec() -> ITokenCodec:
    return _token_codec


def get_email_sender() -> IEmailSender:
    return _email_sender


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    codec: ITokenCodec = Depends(get_token_codec),
) -> dict:
    """
    Dependency to extract and verify the access token from the Authorization header.

    Returns:
        Decoded access-token claims (sub, email, role, device_id, ...)

    Raises:
        HTTPException: 401 if token is invalid, expired or not an access token
    """
    result = codec.verify(TokenKind.access, credentials.credentials)

    if result.is_err():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return result.value


async def init_models():
    """Create tables that do not exist yet"""
    import authcore.domain.entities  # noqa: F401  (registers table models)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
