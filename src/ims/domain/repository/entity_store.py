"""Generic repository contract shared by every entity kind.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (flat files, in-memory)
live in the infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class EntityStore(ABC, Generic[T]):
    """list / find / upsert / delete over one entity kind.

    Implementations must honour:
    - ``save`` is an upsert: saving twice with the same id replaces the
      stored record, it never duplicates it
    - ``delete`` of an unknown id is a no-op, unless the store declares
      deletion unsupported by raising UnsupportedOperationError
    - I/O failures surface as StorageError
    """

    @abstractmethod
    def list_all(self) -> list[T]:
        """Return every stored entity."""

    @abstractmethod
    def get_by_id(self, entity_id: str) -> T | None:
        """Return the entity with this id, or None."""

    @abstractmethod
    def save(self, entity: T) -> None:
        """Insert or replace the entity."""

    @abstractmethod
    def delete(self, entity_id: str) -> None:
        """Remove the entity with this id."""
