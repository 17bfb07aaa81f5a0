"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Base class for all value objects.

    Value objects are immutable and compared by value. Two identities with
    the same login and ID are the same caller.
    """

    model_config = ConfigDict(frozen=True)
