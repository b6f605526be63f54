"""Task domain model."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class TaskEntity:
    """A to-do item owned by a single user.

    ``owner`` holds the creator's username. It is an association by key only:
    nothing checks that the user still exists, and removing a user leaves its
    tasks in place.
    """

    id: UUID
    description: str
    owner: str
    due: str | None = None

    def belongs_to(self, username: str) -> bool:
        return self.owner == username


__all__ = ["TaskEntity"]
