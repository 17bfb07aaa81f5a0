"""Base models for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for immutable domain models.

    Provides common configuration for immutability and custom types.
    """

    model_config = ConfigDict(
        frozen=True,  # Entities embedded in an aggregate are immutable
        arbitrary_types_allowed=True,  # Allow custom value objects
    )


class AggregateRoot(BaseModel):
    """Base class for aggregate roots.

    Aggregates change state through their own methods, so they are mutable.
    They are not safe for concurrent use; stores serialize access.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
    )
