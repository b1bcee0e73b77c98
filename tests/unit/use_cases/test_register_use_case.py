from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from authcore.app.use_cases.auth.dtos import RegisterCommand
from authcore.app.use_cases.auth.register_use_case import RegisterUseCase
from authcore.domain.base import utcnow
from authcore.domain.entities import User


@pytest.fixture
def uow(mock_uow):
    """Mock UnitOfWork with users and accounts repositories"""
    mock_uow.users = MagicMock()
    mock_uow.users.get_by_email = AsyncMock(return_value=None)
    mock_uow.users.get_by_id = AsyncMock(return_value=None)
    mock_uow.users.create = AsyncMock(side_effect=lambda user: user)
    mock_uow.users.update = AsyncMock(side_effect=lambda user: user)
    mock_uow.users.delete_by_id = AsyncMock(return_value=True)

    mock_uow.accounts = MagicMock()
    mock_uow.accounts.create = AsyncMock(side_effect=lambda account: account)
    return mock_uow


def make_command(**overrides):
    data = dict(
        email="u@example.com",
        password="Secret123!",
        confirm_password="Secret123!",
        full_name="Test User",
        age=30,
        occupation="Engineer",
    )
    data.update(overrides)
    return RegisterCommand(**data)


@pytest.mark.asyncio
async def test_successful_registration(uow, hasher, email_sender):
    use_case = RegisterUseCase(uow, hasher, email_sender)

    result = await use_case.execute(make_command())

    assert result.is_ok()
    assert len(result.value.user_id) == 10

    created = uow.users.create.call_args[0][0]
    assert created.public_id == result.value.user_id
    assert created.email == "u@example.com"
    assert created.is_active is False
    assert hasher.verify("Secret123!", created.password_hash)

    # 32 random bytes, hex encoded
    assert len(created.activation_token) == 64
    remaining = created.activation_expires_at - utcnow()
    assert timedelta(minutes=29) < remaining <= timedelta(minutes=30)

    email_sender.send_activation.assert_awaited_once_with(
        "u@example.com", created.activation_token, "Test User"
    )
    assert uow.commit.await_count == 2


@pytest.mark.asyncio
async def test_registration_provisions_primary_account(uow, hasher, email_sender):
    use_case = RegisterUseCase(uow, hasher, email_sender, default_currency="MXN")

    result = await use_case.execute(make_command())

    assert result.is_ok()
    account = uow.accounts.create.call_args[0][0]
    assert account.user_id == result.value.user_id
    assert account.currency == "MXN"
    assert account.is_primary is True

    updated = uow.users.update.call_args[0][0]
    assert updated.active_account_id == str(account.id)


@pytest.mark.asyncio
async def test_registration_uses_requested_currency(uow, hasher, email_sender):
    use_case = RegisterUseCase(uow, hasher, email_sender, default_currency="MXN")

    result = await use_case.execute(make_command(currency="USD"))

    assert result.is_ok()
    assert uow.accounts.create.call_args[0][0].currency == "USD"
    assert uow.users.create.call_args[0][0].primary_currency == "USD"


@pytest.mark.asyncio
async def test_registration_duplicate_email(uow, hasher, email_sender):
    uow.users.get_by_email.return_value = User(
        public_id="existing01",
        email="u@example.com",
        password_hash="hash",
        full_name="Existing",
    )
    use_case = RegisterUseCase(uow, hasher, email_sender)

    result = await use_case.execute(make_command())

    assert result.is_err()
    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    uow.users.create.assert_not_called()
    email_sender.send_activation.assert_not_called()


@pytest.mark.asyncio
async def test_registration_password_mismatch(uow, hasher, email_sender):
    use_case = RegisterUseCase(uow, hasher, email_sender)

    result = await use_case.execute(make_command(confirm_password="Different1!"))

    assert result.is_err()
    assert result.error.code == "PASSWORD_MISMATCH"
    uow.users.create.assert_not_called()
    uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_registration_survives_email_failure(uow, hasher, email_sender):
    email_sender.send_activation.side_effect = RuntimeError("smtp down")
    use_case = RegisterUseCase(uow, hasher, email_sender)

    result = await use_case.execute(make_command())

    assert result.is_ok()
    uow.users.delete_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_registration_survives_undelivered_email(uow, hasher, email_sender):
    email_sender.send_activation.return_value = False
    use_case = RegisterUseCase(uow, hasher, email_sender)

    result = await use_case.execute(make_command())

    assert result.is_ok()


@pytest.mark.asyncio
async def test_provisioning_failure_deletes_identity(uow, hasher, email_sender):
    uow.accounts.create.side_effect = RuntimeError("accounts store unavailable")
    use_case = RegisterUseCase(uow, hasher, email_sender)

    with pytest.raises(RuntimeError):
        await use_case.execute(make_command())

    created = uow.users.create.call_args[0][0]
    uow.rollback.assert_awaited()
    uow.users.delete_by_id.assert_awaited_once_with(created.public_id)
    email_sender.send_activation.assert_not_called()


@pytest.mark.asyncio
async def test_public_id_regenerated_on_collision(uow, hasher, email_sender):
    taken = User(public_id="taken", email="x@example.com", password_hash="h", full_name="X")
    uow.users.get_by_id.side_effect = [taken, None]
    use_case = RegisterUseCase(uow, hasher, email_sender)

    result = await use_case.execute(make_command())

    assert result.is_ok()
    assert uow.users.get_by_id.await_count == 2


@pytest.mark.asyncio
async def test_registration_duplicate_detected_at_insert(uow, hasher, email_sender):
    # Another registration inserted the email between the lookup and the insert
    uow.users.create.side_effect = IntegrityError(
        "INSERT INTO users", {}, Exception("UNIQUE constraint failed: users.email")
    )
    use_case = RegisterUseCase(uow, hasher, email_sender)

    result = await use_case.execute(make_command())

    assert result.is_err()
    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    uow.rollback.assert_awaited_once()
    uow.accounts.create.assert_not_called()
    email_sender.send_activation.assert_not_called()
