"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Customer``).  Implementations return ``None``
    for missing entities and let storage errors propagate unchanged.
    """

    @abstractmethod
    def get_by_id(self, id: Any) -> Optional[T]:
        """Retrieve an entity by its surrogate identifier."""

    @abstractmethod
    def list(self) -> List[T]:
        """Return every stored entity."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Insert a new entity and return it with its identifier assigned."""

    @abstractmethod
    def update(self, entity: T) -> T:
        """Persist an existing entity (matched by identifier) and return it."""
