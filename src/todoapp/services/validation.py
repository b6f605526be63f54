"""Stateless request checks, each raising one specific failure kind.

The checks are composed by :class:`~todoapp.services.todo.ToDoService` in a
fixed order per operation; a request violating several of them reports the
first failing check only.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..core.security import Credentials
from ..errors import ForbiddenError, InvalidBodyError, NotAuthenticatedError, NotFoundError
from ..models import TaskEntity, UserEntity
from ..repositories import UserRepository
from ..schemas import TaskPayload, UserPayload


_PayloadModel = TypeVar("_PayloadModel", bound=BaseModel)


def _error_fields(exc: ValidationError) -> list[str]:
    return [".".join(str(part) for part in error["loc"]) or "body" for error in exc.errors()]


def _load_payload(
    model: type[_PayloadModel],
    payload: Any,
    *,
    missing: str,
    invalid: str,
) -> _PayloadModel:
    """Validate ``payload``, which is either raw JSON text or already-parsed data."""

    if payload is None or payload in (b"", ""):
        raise InvalidBodyError(missing)
    try:
        if isinstance(payload, (bytes, bytearray, str)):
            return model.model_validate_json(payload)
        return model.model_validate(payload)
    except ValidationError as exc:
        raise InvalidBodyError(invalid, details={"fields": _error_fields(exc)}) from exc


def validate_user_body(payload: Any) -> UserPayload:
    """Return the registration payload or raise :class:`InvalidBodyError`."""

    return _load_payload(
        UserPayload,
        payload,
        missing="User data are missing.",
        invalid="User data are not valid.",
    )


def validate_task_body(payload: Any) -> TaskPayload:
    """Return the task payload or raise :class:`InvalidBodyError`.

    Fails when the body is absent or not JSON, ``description`` is missing or
    empty, or ``due`` is present but not a real ``YYYY-MM-DD`` date.
    """

    return _load_payload(
        TaskPayload,
        payload,
        missing="Task body is missing.",
        invalid="Task body is not valid.",
    )


def validate_credentials(users: UserRepository, credentials: Credentials) -> UserEntity:
    """Return the stored user matching ``credentials`` exactly."""

    user = users.get(credentials.username)
    if user is None or user.password != credentials.password:
        raise NotAuthenticatedError()
    return user


def validate_ownership(task: TaskEntity | None, username: str) -> TaskEntity:
    """Existence first, then ownership."""

    if task is None:
        raise NotFoundError("Task does not exist.")
    if not task.belongs_to(username):
        raise ForbiddenError()
    return task


__all__ = [
    "validate_credentials",
    "validate_ownership",
    "validate_task_body",
    "validate_user_body",
]
