"""Post aggregate root.

A post owns its vote ledger and its comment list. Every state change goes
through a method on the aggregate so the score, the ledger and the cached
upvote percentage never drift apart.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from redditclone.domain.error import (
    CommentNotFoundError,
    InvalidPostTextError,
    InvalidURLError,
)
from redditclone.domain.model.comment import Comment
from redditclone.domain.model.common import AggregateRoot
from redditclone.domain.model.vote import PostVote, VoteLedger
from redditclone.domain.value import (
    CallerIdentity,
    CommentId,
    PostCategory,
    PostId,
    PostPayload,
    PostType,
    UserId,
    VoteDirection,
    is_valid_url,
    new_id,
    utc_timestamp,
)


def upvote_percentage(score: int, total_votes: int) -> int:
    """Share of upvotes among all votes, rounded down.

    Each vote contributes +1 or -1 to the score, so ``score + total_votes``
    is twice the number of upvotes.
    """
    if total_votes == 0:
        return 0
    return (score + total_votes) * 100 // (total_votes * 2)


class Post(AggregateRoot):
    """Post aggregate root.

    Type-based content rules:
    - link posts carry a URL and no text
    - text posts carry text and no URL
    """

    id: PostId = Field(default_factory=lambda: PostId(new_id()))
    score: int = 1
    views: int = Field(default=1, ge=0)
    type: PostType
    title: str
    url: Optional[str] = None
    author: CallerIdentity
    category: PostCategory
    text: Optional[str] = None
    votes: VoteLedger = Field(default_factory=VoteLedger)
    comments: list[Comment] = Field(default_factory=list)
    created: str = Field(default_factory=utc_timestamp)
    upvote_percentage: int = Field(default=100, ge=0, le=100)

    @model_validator(mode="after")
    def validate_post_type_content(self) -> "Post":
        """Validate that URL or text is provided based on post type."""
        if self.type == PostType.LINK and not self.url:
            raise ValueError("URL is required for link posts")
        if self.type == PostType.TEXT and not self.text:
            raise ValueError("Text is required for text posts")
        return self

    @classmethod
    def create(
        cls,
        author: CallerIdentity,
        payload: PostPayload,
        now: Optional[datetime] = None,
    ) -> "Post":
        """Build a new post with its author's self-upvote.

        Args:
            author: Identity of the creating user
            payload: Post creation payload
            now: Creation time (defaults to the current UTC time)

        Returns:
            New post with score 1, one view and 100% upvotes

        Raises:
            InvalidURLError: If a link post has a malformed URL
            InvalidPostTextError: If a text post has no text
        """
        is_link = payload.type == PostType.LINK
        if is_link and not is_valid_url(payload.url):
            raise InvalidURLError(payload.url)
        if not is_link and not payload.text:
            raise InvalidPostTextError()

        post = cls(
            type=payload.type,
            title=payload.title,
            url=payload.url if is_link else None,
            author=author,
            category=payload.category,
            text=None if is_link else payload.text,
            score=1,
            views=1,
            votes=VoteLedger({author.id: PostVote(user=author.id, vote=VoteDirection.UP)}),
            comments=[],
            created=utc_timestamp(now),
        )
        post._refresh_upvote_percentage()
        return post

    def add_comment(self, author: CallerIdentity, body: str) -> Comment:
        """Append a comment and return it."""
        comment = Comment(author=author, body=body)
        self.comments.append(comment)
        return comment

    def delete_comment(self, comment_id: CommentId) -> Comment:
        """Remove a comment by ID and return it.

        Raises:
            CommentNotFoundError: If no comment has this ID
        """
        for index, comment in enumerate(self.comments):
            if comment.id == comment_id:
                return self.comments.pop(index)
        raise CommentNotFoundError(comment_id)

    def upvote(self, user_id: UserId) -> tuple[PostVote, bool]:
        """Vote the post up.

        Returns:
            Tuple of (user's vote, whether a new ledger entry was created)
        """
        return self._vote(user_id, VoteDirection.UP)

    def downvote(self, user_id: UserId) -> tuple[PostVote, bool]:
        """Vote the post down.

        Returns:
            Tuple of (user's vote, whether a new ledger entry was created)
        """
        return self._vote(user_id, VoteDirection.DOWN)

    def unvote(self, user_id: UserId) -> PostVote:
        """Withdraw the user's vote and return it.

        Raises:
            VoteNotFoundError: If the user has not voted on this post
        """
        vote, delta = self.votes.retract(user_id)
        self.score += delta
        self._refresh_upvote_percentage()
        return vote

    def increment_views(self) -> "Post":
        self.views += 1
        return self

    def snapshot(self) -> "Post":
        """Deep copy that shares no mutable state with this post."""
        return self.model_copy(deep=True)

    def _vote(self, user_id: UserId, direction: VoteDirection) -> tuple[PostVote, bool]:
        vote, created, delta = self.votes.cast(user_id, direction)
        self.score += delta
        self._refresh_upvote_percentage()
        return vote, created

    def _refresh_upvote_percentage(self) -> None:
        self.upvote_percentage = upvote_percentage(self.score, len(self.votes))
