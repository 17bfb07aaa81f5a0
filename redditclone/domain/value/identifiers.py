"""Strongly typed identifiers for redditclone domain entities.

Identifiers are exchanged as 36-character UUID strings. NewType keeps post,
comment and user identifiers from being mixed up while staying plain strings
on the wire and in storage.
"""

from typing import NewType
from uuid import uuid4

UUID_LENGTH = 36

UserId = NewType("UserId", str)
PostId = NewType("PostId", str)
CommentId = NewType("CommentId", str)


def new_id() -> str:
    """Generate a new 36-character identifier for posts and comments."""
    return str(uuid4())
