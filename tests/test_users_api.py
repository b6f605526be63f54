from __future__ import annotations

import asyncio

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_register_user_returns_created(client: AsyncClient) -> None:
    response = await client.post("/todo/user", json={"username": "username", "password": "password"})

    assert response.status_code == 201
    assert response.json() == {"username": "username"}
    assert "password" not in response.text


async def test_register_duplicate_user_conflicts(client: AsyncClient) -> None:
    body = {"username": "username", "password": "password"}
    await client.post("/todo/user", json=body)

    response = await client.post("/todo/user", json={**body, "password": "other"})

    assert response.status_code == 409
    assert response.json()["code"] == "already_exists"


@pytest.mark.parametrize(
    "body",
    [
        {"username": "", "password": "password"},
        {"username": "username", "password": ""},
        {"username": "username"},
        {},
        None,
    ],
)
async def test_register_invalid_user_is_bad_request(client: AsyncClient, body: object) -> None:
    response = await client.post("/todo/user", json=body)

    assert response.status_code == 400
    assert response.json()["code"] == "invalid_body"


async def test_register_without_body_is_bad_request(client: AsyncClient) -> None:
    response = await client.post("/todo/user")

    assert response.status_code == 400


async def test_register_with_unparseable_json_is_bad_request(client: AsyncClient) -> None:
    response = await client.post(
        "/todo/user",
        content=b'{"username": "a",',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "invalid_body"


async def test_register_accepts_json_sent_as_plain_text(client: AsyncClient) -> None:
    response = await client.post(
        "/todo/user",
        content=b'{"username": "plain", "password": "text"}',
        headers={"Content-Type": "text/plain"},
    )

    assert response.status_code == 201
    assert response.json() == {"username": "plain"}


async def test_parallel_registrations_of_one_username_succeed_once(client: AsyncClient) -> None:
    responses = await asyncio.gather(
        *(
            client.post("/todo/user", json={"username": "racer", "password": f"pass-{index}"})
            for index in range(20)
        )
    )

    statuses = [response.status_code for response in responses]
    assert statuses.count(201) == 1
    assert statuses.count(409) == 19
