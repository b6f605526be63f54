"""Repository holding tasks for every user."""

from __future__ import annotations

from uuid import UUID

from ..models import TaskEntity
from .base import InMemoryRepository


class TaskRepository(InMemoryRepository[UUID, TaskEntity]):
    """Concrete repository for ``TaskEntity`` records keyed by task id."""

    def add(self, task: TaskEntity) -> UUID | None:
        """Store ``task`` under its id; ``None`` if the id is already in use."""
        return self.save(task.id, task)

    def list_for_owner(self, owner: str) -> list[TaskEntity]:
        """Return all tasks whose owner is ``owner``."""
        return self.find(lambda task: task.belongs_to(owner))


__all__ = ["TaskRepository"]
