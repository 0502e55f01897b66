"""Base classes for domain entities, value objects and services."""

from abc import ABC

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Base class for value objects (immutable, defined by their values)."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class Entity(BaseModel):
    """Base class for entities (have identity, can change over time)."""

    model_config = ConfigDict(validate_assignment=True, arbitrary_types_allowed=True)

    id: str | None = None

    def __eq__(self, other: object) -> bool:
        """Committed entities are equal if they have the same ID and type."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return super().__eq__(other)
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.id))


class DomainService(ABC):
    """Base class for domain services (business logic that doesn't belong to a single entity)."""

    pass
