"""User domain model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UserEntity:
    """Registered user, keyed by ``username``.

    The password is kept and compared verbatim.
    """

    username: str
    password: str

    def __repr__(self) -> str:
        return f"UserEntity(username={self.username!r})"


__all__ = ["UserEntity"]
