"""Domain model entities for redditclone."""

from redditclone.domain.model.comment import Comment
from redditclone.domain.model.post import Post, upvote_percentage
from redditclone.domain.model.vote import PostVote, VoteLedger

__all__ = [
    "Post",
    "Comment",
    "PostVote",
    "VoteLedger",
    "upvote_percentage",
]
