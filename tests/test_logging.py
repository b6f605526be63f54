from __future__ import annotations

import io
import json
import logging
import sys
from collections.abc import Iterator
from typing import Any
from uuid import uuid4

import pytest
from httpx import AsyncClient

from todoapp.core.config import Settings
from todoapp.core.logging import JsonLogFormatter


@pytest.fixture()
def settings() -> Settings:
    return Settings(environment="test", log_level="INFO")


@pytest.fixture()
def log_output(app) -> Iterator[io.StringIO]:
    """Capture what the JSON stdout handler writes while the app serves requests."""

    handler = next(
        h for h in logging.getLogger().handlers if isinstance(h.formatter, JsonLogFormatter)
    )
    buffer = io.StringIO()
    previous = handler.setStream(buffer)
    try:
        yield buffer
    finally:
        handler.setStream(previous)


def _events(buffer: io.StringIO, message: str) -> list[dict[str, Any]]:
    lines = [json.loads(line) for line in buffer.getvalue().splitlines() if line.strip()]
    return [line for line in lines if line["message"] == message]


@pytest.mark.asyncio
async def test_task_creation_is_logged_with_task_and_owner(
    client: AsyncClient,
    register_user,
    log_output: io.StringIO,
) -> None:
    headers = await register_user(username="alice")

    response = await client.post("/todo/task", json={"description": "buy milk"}, headers=headers)

    assert response.status_code == 201
    (event,) = _events(log_output, "Task created")
    assert event["level"] == "INFO"
    assert event["logger"] == "todoapp.services.todo"
    assert event["task_id"] == response.json()["id"]
    assert event["owner"] == "alice"
    assert event["request_id"] == response.headers["X-Request-ID"]
    assert event["service"] == "ToDo App"
    assert event["environment"] == "test"


@pytest.mark.asyncio
async def test_rejected_request_is_logged_with_failure_code(
    client: AsyncClient,
    register_user,
    log_output: io.StringIO,
) -> None:
    headers = await register_user()

    response = await client.get(f"/todo/task/{uuid4()}", headers=headers)

    assert response.status_code == 404
    (event,) = _events(log_output, "Task does not exist.")
    assert event["level"] == "WARNING"
    assert event["code"] == "not_found"
    assert event["status_code"] == 404
    assert event["request_id"] == response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_each_request_gets_one_access_line(
    client: AsyncClient,
    log_output: io.StringIO,
) -> None:
    response = await client.post(
        "/todo/user",
        json={"username": "bob", "password": "secret"},
        headers={"X-Request-ID": "req-access-1"},
    )

    assert response.status_code == 201
    (event,) = _events(log_output, "Request completed")
    assert event["method"] == "POST"
    assert event["path"] == "/todo/user"
    assert event["status_code"] == 201
    assert event["duration_ms"] >= 0
    assert event["request_id"] == "req-access-1"


def test_formatter_renders_ids_as_strings_and_keeps_traceback() -> None:
    formatter = JsonLogFormatter(service="ToDo App", environment="production")
    task_id = uuid4()
    try:
        raise RuntimeError("id collision")
    except RuntimeError:
        record = logging.getLogger("todoapp.tests").makeRecord(
            "todoapp.tests",
            logging.ERROR,
            __file__,
            1,
            "Unhandled application error.",
            (),
            exc_info=sys.exc_info(),
            extra={"task_id": task_id},
        )

    payload = json.loads(formatter.format(record))

    assert payload["task_id"] == str(task_id)
    assert payload["request_id"] == "-"
    assert payload["environment"] == "production"
    assert "RuntimeError: id collision" in payload["exception"]
