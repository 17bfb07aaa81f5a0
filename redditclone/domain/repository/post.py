"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List

from redditclone.domain.error import BadPayloadError
from redditclone.domain.model import Post
from redditclone.domain.value import (
    CallerIdentity,
    CommentId,
    PostCategory,
    PostId,
    PostPayload,
)


class PostRepository(ABC):
    """Repository for the Post aggregate.

    Defines the contract for post persistence operations. Every
    implementation must behave identically as observed by callers:

    - Listings are ordered by descending score; posts with equal score keep
      their creation order. Author listings are ordered most recent first.
    - Reads return snapshots. Mutating a returned post never changes stored
      state until it is handed back to one of the mutation methods.
    - Mutation methods take an already-fetched post, apply the aggregate
      operation to it and then persist only the changed fields (a delta
      write). A delta write must be atomic per post so that concurrent
      voters on the same post never lose each other's updates; a
      read-modify-rewrite of the whole post is not an acceptable
      implementation.
    - Backend failures raise ``StorageError`` chained from the backend
      exception. A missing post always raises ``PostNotFoundError``.
    """

    @abstractmethod
    async def find_all(self) -> List[Post]:
        """Find all posts, highest score first."""
        pass

    @abstractmethod
    async def find_by_category(self, category: PostCategory) -> List[Post]:
        """Find posts in a category, highest score first.

        Args:
            category: Category to filter by

        Returns:
            Posts in the category
        """
        pass

    @abstractmethod
    async def find_by_author(self, login: str) -> List[Post]:
        """Find posts by an author's login, most recent first.

        Args:
            login: Author login as embedded in the post

        Returns:
            Posts by the author
        """
        pass

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Post:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post

        Raises:
            PostNotFoundError: If no post has this ID
        """
        pass

    @abstractmethod
    async def create(self, payload: PostPayload, author: CallerIdentity | None) -> Post:
        """Create and store a post on behalf of the author.

        Args:
            payload: Post creation payload
            author: Identity of the creating user

        Returns:
            The created post

        Raises:
            BadPayloadError: If no author identity is given
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> None:
        """Delete a post.

        Args:
            post_id: The post ID to delete

        Raises:
            PostNotFoundError: If nothing was deleted
        """
        pass

    @abstractmethod
    async def add_comment(
        self, post: Post, author: CallerIdentity | None, body: str
    ) -> Post:
        """Append a comment to a fetched post and persist it.

        Raises:
            BadPayloadError: If no author identity is given
        """
        pass

    @abstractmethod
    async def delete_comment(self, post: Post, comment_id: CommentId) -> Post:
        """Remove a comment from a fetched post and persist the removal.

        Raises:
            CommentNotFoundError: If the post has no such comment
        """
        pass

    @abstractmethod
    async def upvote(self, post: Post, voter: CallerIdentity | None) -> Post:
        """Vote a fetched post up and persist the ledger change.

        Raises:
            BadPayloadError: If no voter identity is given
        """
        pass

    @abstractmethod
    async def downvote(self, post: Post, voter: CallerIdentity | None) -> Post:
        """Vote a fetched post down and persist the ledger change.

        Raises:
            BadPayloadError: If no voter identity is given
        """
        pass

    @abstractmethod
    async def unvote(self, post: Post, voter: CallerIdentity | None) -> Post:
        """Withdraw a vote from a fetched post and persist the removal.

        Raises:
            BadPayloadError: If no voter identity is given
            VoteNotFoundError: If the voter has not voted
        """
        pass

    @abstractmethod
    async def increment_views(self, post_id: PostId) -> None:
        """Atomically increment the view counter by 1.

        Raises:
            PostNotFoundError: If no post has this ID
        """
        pass


def require_identity(identity: CallerIdentity | None) -> CallerIdentity:
    """Return the caller identity or fail with ``BadPayloadError``."""
    if identity is None:
        raise BadPayloadError("caller identity is required")
    return identity

