"""Service layer encapsulating user registration and task operations."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any
from uuid import UUID, uuid4

from ..core.security import decode_auth_header
from ..errors import AlreadyExistsError, NotFoundError
from ..models import TaskEntity, UserEntity
from ..repositories import TaskRepository, UserRepository
from ..schemas import TaskPayload
from .validation import (
    validate_credentials,
    validate_ownership,
    validate_task_body,
    validate_user_body,
)

logger = logging.getLogger(__name__)


class ToDoService:
    """High-level business orchestration for users and their tasks.

    The store-level methods (``register_user``, ``create_task``, ``list_tasks``,
    ``get_task``, ``update_task``, ``delete_task``) act on the repositories
    directly. The request-level methods take the raw authentication header and
    body and run the checks in the order each operation requires before
    delegating to them.
    """

    def __init__(
        self,
        users: UserRepository | None = None,
        tasks: TaskRepository | None = None,
        *,
        id_factory: Callable[[], UUID] = uuid4,
    ) -> None:
        self._users = users if users is not None else UserRepository()
        self._tasks = tasks if tasks is not None else TaskRepository()
        self._id_factory = id_factory

    @property
    def users(self) -> UserRepository:
        """Expose the user repository for advanced scenarios."""
        return self._users

    @property
    def tasks(self) -> TaskRepository:
        """Expose the task repository for advanced scenarios."""
        return self._tasks

    def register_user(self, payload: Any) -> UserEntity:
        """Validate and store a new user."""
        body = validate_user_body(payload)
        user = UserEntity(username=body.username, password=body.password)
        if self._users.add(user) is None:
            raise AlreadyExistsError(f'User "{user.username}" already exists.')
        logger.info("User registered", extra={"username": user.username})
        return user

    def create_task(self, task: TaskPayload, owner: str) -> UUID:
        """Assign a fresh id and ``owner`` to ``task`` and store it."""
        entity = TaskEntity(
            id=self._id_factory(),
            description=task.description,
            due=task.due,
            owner=owner,
        )
        if self._tasks.add(entity) is None:
            raise RuntimeError(f"Generated task id {entity.id} collides with a stored task")
        logger.info("Task created", extra={"task_id": str(entity.id), "owner": owner})
        return entity.id

    def list_tasks(self, owner: str) -> list[TaskEntity]:
        """Return a snapshot of the tasks owned by ``owner``."""
        return self._tasks.list_for_owner(owner)

    def get_task(self, task_id: UUID) -> TaskEntity | None:
        """Retrieve a task by id."""
        return self._tasks.get(task_id)

    def update_task(self, task_id: UUID, task: TaskPayload, owner: str) -> TaskEntity | None:
        """Replace the stored task wholesale; ``None`` if ``task_id`` is unknown.

        ``id`` comes from the path and ``owner`` from the caller's credentials.
        """
        entity = TaskEntity(
            id=task_id,
            description=task.description,
            due=task.due,
            owner=owner,
        )
        updated = self._tasks.update(task_id, entity)
        if updated is not None:
            logger.info("Task updated", extra={"task_id": str(task_id), "owner": owner})
        return updated

    def delete_task(self, task_id: UUID) -> bool:
        """Delete a task by id, returning ``True`` iff a record was removed."""
        deleted = self._tasks.delete(task_id)
        if deleted:
            logger.info("Task deleted", extra={"task_id": str(task_id)})
        return deleted

    def authenticate(self, auth_header: str | None) -> UserEntity:
        """Decode the header and match it against the registered users."""
        credentials = decode_auth_header(auth_header)
        return validate_credentials(self._users, credentials)

    def submit_task(self, auth_header: str | None, payload: Any) -> UUID:
        credentials = decode_auth_header(auth_header)
        task = validate_task_body(payload)
        user = validate_credentials(self._users, credentials)
        return self.create_task(task, user.username)

    def list_owned_tasks(self, auth_header: str | None) -> list[TaskEntity]:
        user = self.authenticate(auth_header)
        return self.list_tasks(user.username)

    def fetch_task(self, auth_header: str | None, task_id: UUID) -> TaskEntity:
        user = self.authenticate(auth_header)
        return validate_ownership(self.get_task(task_id), user.username)

    def replace_task(self, auth_header: str | None, task_id: UUID, payload: Any) -> TaskEntity:
        credentials = decode_auth_header(auth_header)
        task = validate_task_body(payload)
        user = validate_credentials(self._users, credentials)
        validate_ownership(self.get_task(task_id), user.username)
        updated = self.update_task(task_id, task, user.username)
        if updated is None:
            # Removed by its owner after the ownership check.
            raise NotFoundError("Task does not exist.")
        return updated

    def remove_task(self, auth_header: str | None, task_id: UUID) -> UUID:
        user = self.authenticate(auth_header)
        validate_ownership(self.get_task(task_id), user.username)
        if not self.delete_task(task_id):
            raise NotFoundError("Task does not exist.")
        return task_id


__all__ = ["ToDoService"]
