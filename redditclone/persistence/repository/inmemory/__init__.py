"""In-memory repository implementations."""

from .post import InMemoryPostRepository

__all__ = [
    "InMemoryPostRepository",
]
