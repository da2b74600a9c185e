"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on boto3 directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Product``).  Writes are full overwrites keyed by
    the entity id; there is no partial/field-level persistence call.
    """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Retrieve an entity by its primary key, or ``None`` if absent."""

    @abstractmethod
    def create(self, entity: T) -> None:
        """Write a new entity unconditionally."""

    @abstractmethod
    def update(self, entity: T) -> None:
        """Overwrite the stored entity with the given full record."""

    @abstractmethod
    def delete(self, id: str) -> None:
        """Remove an entity by ID.  Missing keys are not an error."""
