from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from itertools import count

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from todoapp.core.config import Settings
from todoapp.core.security import encode_auth_header
from todoapp.main import create_app
from todoapp.services import ToDoService

AUTH_HEADER = "auth"

RegisterUser = Callable[..., Awaitable[dict[str, str]]]


@pytest.fixture()
def settings() -> Settings:
    return Settings(environment="test")


@pytest.fixture()
def service() -> ToDoService:
    return ToDoService()


@pytest.fixture()
def app(settings: Settings, service: ToDoService) -> FastAPI:
    return create_app(settings, service)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


@pytest_asyncio.fixture
async def register_user(client: AsyncClient) -> AsyncIterator[RegisterUser]:
    """Register a user over HTTP and return the matching auth headers."""

    counter = count()

    async def _factory(
        *,
        username: str | None = None,
        password: str = "password",
    ) -> dict[str, str]:
        actual_username = username or f"user-{next(counter)}"
        response = await client.post(
            "/todo/user",
            json={"username": actual_username, "password": password},
        )
        assert response.status_code == 201, response.text
        return {AUTH_HEADER: encode_auth_header(actual_username, password)}

    yield _factory
