"""Reusable FastAPI dependencies."""

from __future__ import annotations

import re
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request

from .core.config import Settings
from .errors import UnroutableRequestError
from .services import ToDoService

_TASK_ID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
)


def get_app_settings(request: Request) -> Settings:
    """Return the settings the running application was built with."""

    return request.app.state.settings


def get_todo_service(request: Request) -> ToDoService:
    """Return the service instance owned by the running application."""

    return request.app.state.todo_service


SettingsDependency = Annotated[Settings, Depends(get_app_settings)]
ToDoServiceDependency = Annotated[ToDoService, Depends(get_todo_service)]


def get_auth_header(request: Request, settings: SettingsDependency) -> str | None:
    """Return the raw authentication header value, if present."""

    return request.headers.get(settings.auth_header_name)


async def get_raw_body(request: Request) -> bytes:
    """Return the request body unparsed, whatever its ``Content-Type``.

    Decoding is left to the service so that a malformed header is still
    reported ahead of a malformed body.
    """

    return await request.body()


def parse_task_id(task_id: str) -> UUID:
    """Accept only lowercase, version 1-5 UUID path segments."""

    if not _TASK_ID_PATTERN.match(task_id):
        raise UnroutableRequestError(task_id)
    return UUID(task_id)


AuthHeaderDependency = Annotated[str | None, Depends(get_auth_header)]
RawBodyDependency = Annotated[bytes, Depends(get_raw_body)]
TaskIdDependency = Annotated[UUID, Depends(parse_task_id)]


__all__ = [
    "AuthHeaderDependency",
    "RawBodyDependency",
    "SettingsDependency",
    "TaskIdDependency",
    "ToDoServiceDependency",
    "get_app_settings",
    "get_auth_header",
    "get_raw_body",
    "get_todo_service",
    "parse_task_id",
]
