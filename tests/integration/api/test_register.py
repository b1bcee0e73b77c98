import pytest
from sqlmodel import select

from authcore.domain.entities import Account, User


@pytest.mark.asyncio
async def test_register_success(client, outbox, test_data):
    payload = test_data.get_copy("register_payload")

    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 201
    body = response.json()
    assert len(body["user_id"]) == 10
    assert body["message"] == "User registered successfully"
    assert [(email, name) for email, _, name in outbox.sent] == [
        (payload["email"], payload["full_name"])
    ]


@pytest.mark.asyncio
async def test_register_stores_inactive_user_with_primary_account(
    client, db_session, test_data
):
    payload = test_data.get_copy("register_payload")
    response = await client.post("/auth/register", json=payload)
    user_id = response.json()["user_id"]

    user = (
        await db_session.exec(
            select(User)
            .where(User.public_id == user_id)
            .execution_options(populate_existing=True)
        )
    ).one()
    assert user.is_active is False
    assert user.activation_token is not None
    assert user.password_hash != payload["password"]

    account = (
        await db_session.exec(select(Account).where(Account.user_id == user_id))
    ).one()
    assert account.is_primary is True
    assert account.balance == 0.0
    assert account.currency == "MXN"
    assert user.active_account_id == str(account.id)


@pytest.mark.asyncio
async def test_register_uses_requested_currency(client, db_session, test_data):
    payload = test_data.get_copy("second_user_payload")
    response = await client.post("/auth/register", json=payload)
    user_id = response.json()["user_id"]

    account = (
        await db_session.exec(select(Account).where(Account.user_id == user_id))
    ).one()
    assert account.currency == "USD"


@pytest.mark.asyncio
async def test_register_duplicate_email(client, outbox, test_data):
    payload = test_data.get_copy("register_payload")
    await client.post("/auth/register", json=payload)

    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"
    assert len(outbox.sent) == 1


@pytest.mark.asyncio
async def test_register_password_mismatch(client, db_session, test_data):
    payload = test_data.get_copy("register_payload")
    payload["confirm_password"] = "Different123!"

    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "PASSWORD_MISMATCH"
    users = (await db_session.exec(select(User))).all()
    assert users == []


@pytest.mark.asyncio
async def test_register_rejects_underage(client, test_data):
    payload = test_data.get_copy("register_payload")
    payload["age"] = 12

    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_register_rejects_invalid_email(client, test_data):
    payload = test_data.get_copy("register_payload")
    payload["email"] = "not-an-email"

    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 422
