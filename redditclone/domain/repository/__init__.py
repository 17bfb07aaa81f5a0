"""Repository interfaces for the redditclone domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from redditclone.domain.repository.post import PostRepository, require_identity

__all__ = [
    "PostRepository",
    "require_identity",
]
