"""Repository holding registered users."""

from __future__ import annotations

from ..models import UserEntity
from .base import InMemoryRepository


class UserRepository(InMemoryRepository[str, UserEntity]):
    """Concrete repository for ``UserEntity`` records keyed by username."""

    def add(self, user: UserEntity) -> str | None:
        """Store ``user`` under its username; ``None`` if the name is taken."""
        return self.save(user.username, user)


__all__ = ["UserRepository"]
