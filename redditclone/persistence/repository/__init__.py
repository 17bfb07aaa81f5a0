"""Repository implementations."""

from redditclone.persistence.repository.inmemory import InMemoryPostRepository
from redditclone.persistence.repository.post import PostgresPostRepository

__all__ = [
    "InMemoryPostRepository",
    "PostgresPostRepository",
]
