from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from authcore.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from authcore.adapter.services.jwt_token_codec import JwtTokenCodec, TokenCodecConfig


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def hasher():
    # Minimum bcrypt cost keeps the suite fast
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def codec_config():
    return TokenCodecConfig(
        access_secret="test-access-secret",
        refresh_secret="test-refresh-secret",
        access_ttl=timedelta(minutes=15),
        refresh_ttl=timedelta(days=30),
    )


@pytest.fixture
def codec(codec_config):
    return JwtTokenCodec(codec_config)


@pytest.fixture
def email_sender():
    sender = MagicMock()
    sender.send_activation = AsyncMock(return_value=True)
    return sender
