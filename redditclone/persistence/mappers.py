"""Mappers for converting between database rows and domain models.

Posts are Pydantic aggregates, so rows are mapped by hand rather than
through SQLAlchemy's ORM.
"""

from typing import Any, Dict

from redditclone.domain.error import StorageError
from redditclone.domain.model import Comment, Post, PostVote, VoteLedger
from redditclone.domain.value import (
    CallerIdentity,
    PostCategory,
    PostId,
    PostType,
)


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(row["id"]),
        score=row["score"],
        views=row["views"],
        type=PostType(row["type"]),
        title=row["title"],
        url=row.get("url"),
        author=CallerIdentity.model_validate(row["author"]),
        category=PostCategory(row["category"]),
        text=row.get("text"),
        votes=VoteLedger.model_validate(row["votes"]),
        comments=[Comment.model_validate(doc) for doc in row["comments"]],
        created=row["created"],
        upvote_percentage=row["upvote_percentage"],
    )


def load_post(row: Dict[str, Any], operation: str) -> Post:
    """Convert a row read by a store operation.

    A row that no longer satisfies the aggregate's invariants is a storage
    fault, not bad client input.

    Raises:
        StorageError: If the row does not map to a valid Post
    """
    try:
        return row_to_post(row)
    except (KeyError, ValueError) as e:
        raise StorageError(operation) from e


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict.

    The ``url`` of a text post and the ``text`` of a link post are left
    out. ``seq`` is assigned by the database.

    Args:
        post: Post domain model

    Returns:
        Dict suitable for database insertion
    """
    data = post.model_dump(mode="json", exclude_none=True)
    data["vote_count"] = len(post.votes)
    return data


def vote_to_doc(vote: PostVote) -> Dict[str, Any]:
    """Convert a vote to its embedded ledger document."""
    return vote.model_dump(mode="json")


def comment_to_doc(comment: Comment) -> Dict[str, Any]:
    """Convert a comment to its embedded document."""
    return comment.model_dump(mode="json")
