"""Thread-safe in-memory repository shared by every entity kind."""

from __future__ import annotations

from collections.abc import Callable, Hashable
from threading import Lock
from typing import Generic, TypeVar

KeyType = TypeVar("KeyType", bound=Hashable)
EntityType = TypeVar("EntityType")


class InMemoryRepository(Generic[KeyType, EntityType]):
    """Keyed container with atomic insert-if-absent semantics.

    Every mutation runs under a single lock so concurrent callers can never
    both observe a successful ``save`` for the same key. Reads take the same
    lock only long enough to copy what they need.
    """

    def __init__(self) -> None:
        self._entities: dict[KeyType, EntityType] = {}
        self._lock = Lock()

    def save(self, key: KeyType, entity: EntityType) -> KeyType | None:
        """Insert ``entity`` under ``key`` unless the key is taken.

        Returns the key on success and ``None`` when an entry already exists;
        the caller decides what a conflict means.
        """
        with self._lock:
            if key in self._entities:
                return None
            self._entities[key] = entity
            return key

    def get(self, key: KeyType) -> EntityType | None:
        """Return the entity stored under ``key`` if any."""
        with self._lock:
            return self._entities.get(key)

    def find(self, predicate: Callable[[EntityType], bool]) -> list[EntityType]:
        """Return a point-in-time snapshot of entities matching ``predicate``."""
        with self._lock:
            snapshot = list(self._entities.values())
        return [entity for entity in snapshot if predicate(entity)]

    def update(self, key: KeyType, entity: EntityType) -> EntityType | None:
        """Replace the entity under ``key``; ``None`` if nothing was stored there."""
        with self._lock:
            if key not in self._entities:
                return None
            self._entities[key] = entity
            return entity

    def delete(self, key: KeyType) -> bool:
        """Remove ``key``, returning ``True`` iff an entry was removed."""
        with self._lock:
            return self._entities.pop(key, None) is not None

    def contains(self, key: KeyType) -> bool:
        with self._lock:
            return key in self._entities

    def __len__(self) -> int:
        with self._lock:
            return len(self._entities)


__all__ = ["InMemoryRepository"]
