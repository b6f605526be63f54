"""Domain models exposed by the to-do service."""

from __future__ import annotations

from .task import TaskEntity
from .user import UserEntity

__all__ = ["TaskEntity", "UserEntity"]
