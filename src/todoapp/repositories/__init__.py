"""In-memory repositories encapsulating entity storage."""

from __future__ import annotations

from .base import InMemoryRepository
from .tasks import TaskRepository
from .users import UserRepository

__all__ = ["InMemoryRepository", "TaskRepository", "UserRepository"]
