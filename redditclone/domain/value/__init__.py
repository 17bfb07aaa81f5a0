"""Domain value objects for redditclone."""

from redditclone.domain.value.identifiers import (
    UUID_LENGTH,
    CommentId,
    PostId,
    UserId,
    new_id,
)
from redditclone.domain.value.types import (
    CallerIdentity,
    PostCategory,
    PostPayload,
    PostType,
    VoteDirection,
    is_valid_url,
    utc_timestamp,
)

__all__ = [
    # Identifiers
    "UUID_LENGTH",
    "UserId",
    "PostId",
    "CommentId",
    "new_id",
    # Types
    "CallerIdentity",
    "PostCategory",
    "PostPayload",
    "PostType",
    "VoteDirection",
    "is_valid_url",
    "utc_timestamp",
]
