import pytest


def _bearer(tokens):
    return {"Authorization": f"Bearer {tokens['access_token']}"}


@pytest.mark.asyncio
async def test_logout_is_idempotent(client, register_and_activate, login):
    payload = await register_and_activate()
    tokens = (await login(payload["email"], payload["password"], device_id="dev1")).json()

    for _ in range(2):
        response = await client.post("/auth/logout", json={}, headers=_bearer(tokens))
        assert response.status_code == 200
        assert response.json()["status"] == "logged_out"


@pytest.mark.asyncio
async def test_refresh_after_logout(client, register_and_activate, login):
    payload = await register_and_activate()
    tokens = (await login(payload["email"], payload["password"], device_id="dev1")).json()

    await client.post("/auth/logout", json={}, headers=_bearer(tokens))
    response = await client.post(
        "/auth/refresh",
        json={"refresh_token": tokens["refresh_token"], "device_id": "dev1"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_SESSION"


@pytest.mark.asyncio
async def test_logout_other_device_keeps_current(client, register_and_activate, login):
    payload = await register_and_activate()
    dev1 = (await login(payload["email"], payload["password"], device_id="dev1")).json()
    dev2 = (await login(payload["email"], payload["password"], device_id="dev2")).json()

    response = await client.post(
        "/auth/logout", json={"device_id": "dev2"}, headers=_bearer(dev1)
    )
    assert response.status_code == 200

    response = await client.post(
        "/auth/refresh",
        json={"refresh_token": dev2["refresh_token"], "device_id": "dev2"},
    )
    assert response.json()["error"]["code"] == "INVALID_SESSION"

    response = await client.post(
        "/auth/refresh",
        json={"refresh_token": dev1["refresh_token"], "device_id": "dev1"},
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_logout_requires_authentication(client):
    response = await client.post("/auth/logout", json={})

    assert response.status_code in (401, 403)


@pytest.mark.asyncio
async def test_logout_rejects_refresh_token_as_bearer(client, register_and_activate, login):
    payload = await register_and_activate()
    tokens = (await login(payload["email"], payload["password"], device_id="dev1")).json()

    response = await client.post(
        "/auth/logout",
        json={},
        headers={"Authorization": f"Bearer {tokens['refresh_token']}"},
    )

    assert response.status_code == 401
