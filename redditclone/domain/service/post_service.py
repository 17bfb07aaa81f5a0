"""Post domain service.

Validates input the store does not check, fetches the post and hands it to
the store mutation. Store failures are re-wrapped with the service
operation name; typed domain errors keep their type and get the operation
name attached as a note.
"""

from contextlib import contextmanager
from typing import Iterator, List

import logfire

from redditclone.domain.error import (
    BadCommentBodyError,
    DomainError,
    InvalidURLError,
    StorageError,
)
from redditclone.domain.model import Post
from redditclone.domain.repository import PostRepository
from redditclone.domain.value import (
    CallerIdentity,
    CommentId,
    PostCategory,
    PostId,
    PostPayload,
    PostType,
    is_valid_url,
)

from .base import Service


@contextmanager
def _operation(name: str, **attributes) -> Iterator[None]:
    """Span an operation and attach its name to errors leaving it."""
    with logfire.span(name, **attributes):
        try:
            yield
        except StorageError as e:
            logfire.error("Storage failure", operation=name, cause=e.operation)
            raise StorageError(name) from e
        except DomainError as e:
            e.add_note(name)
            raise


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def list_posts(self) -> List[Post]:
        """List all posts, highest score first."""
        with _operation("post_service.list_posts"):
            return await self.post_repository.find_all()

    async def list_posts_by_category(self, category: PostCategory) -> List[Post]:
        """List posts in a category, highest score first."""
        with _operation("post_service.list_posts_by_category", category=category.value):
            return await self.post_repository.find_by_category(category)

    async def list_posts_by_author(self, login: str) -> List[Post]:
        """List an author's posts, newest first."""
        with _operation("post_service.list_posts_by_author", login=login):
            return await self.post_repository.find_by_author(login)

    async def get_post(self, post_id: PostId) -> Post:
        """Get a post and count the view.

        The view increment is best effort: if it fails the failure is
        logged and the post is still returned.

        Args:
            post_id: Post ID

        Returns:
            Post with its view count including this view

        Raises:
            PostNotFoundError: If no post has this ID
        """
        with _operation("post_service.get_post", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            try:
                await self.post_repository.increment_views(post_id)
            except DomainError as e:
                logfire.warn(
                    "View increment failed",
                    post_id=str(post_id),
                    error=str(e),
                )
            return post.increment_views()

    async def create_post(self, caller: CallerIdentity | None, payload: PostPayload) -> Post:
        """Create a post on behalf of the caller.

        Args:
            caller: Identity of the creating user
            payload: Post creation payload

        Returns:
            Created post

        Raises:
            InvalidURLError: If a link post has a malformed URL
            BadPayloadError: If no caller identity is given
        """
        with _operation(
            "post_service.create_post",
            title=payload.title,
            category=payload.category.value,
        ):
            if payload.type == PostType.LINK and not is_valid_url(payload.url):
                logfire.warn("Rejected link post URL", url=payload.url)
                raise InvalidURLError(payload.url)

            post = await self.post_repository.create(payload, caller)
            logfire.info("Post created", post_id=str(post.id))
            return post

    async def delete_post(self, post_id: PostId) -> None:
        """Delete a post.

        Raises:
            PostNotFoundError: If no post has this ID
        """
        with _operation("post_service.delete_post", post_id=str(post_id)):
            await self.post_repository.delete(post_id)
            logfire.info("Post deleted", post_id=str(post_id))

    async def add_comment(
        self, caller: CallerIdentity | None, post_id: PostId, body: str
    ) -> Post:
        """Add a comment to a post.

        Raises:
            BadCommentBodyError: If the body is empty
            PostNotFoundError: If no post has this ID
        """
        with _operation("post_service.add_comment", post_id=str(post_id)):
            if not body:
                raise BadCommentBodyError()

            post = await self.post_repository.find_by_id(post_id)
            updated = await self.post_repository.add_comment(post, caller, body)
            logfire.info(
                "Comment added", post_id=str(post_id), comments=len(updated.comments)
            )
            return updated

    async def delete_comment(self, post_id: PostId, comment_id: CommentId) -> Post:
        """Delete a comment from a post.

        Raises:
            PostNotFoundError: If no post has this ID
            CommentNotFoundError: If the post has no such comment
        """
        with _operation(
            "post_service.delete_comment",
            post_id=str(post_id),
            comment_id=str(comment_id),
        ):
            post = await self.post_repository.find_by_id(post_id)
            return await self.post_repository.delete_comment(post, comment_id)

    async def upvote(self, caller: CallerIdentity | None, post_id: PostId) -> Post:
        """Vote a post up."""
        with _operation("post_service.upvote", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            return await self.post_repository.upvote(post, caller)

    async def downvote(self, caller: CallerIdentity | None, post_id: PostId) -> Post:
        """Vote a post down."""
        with _operation("post_service.downvote", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            return await self.post_repository.downvote(post, caller)

    async def unvote(self, caller: CallerIdentity | None, post_id: PostId) -> Post:
        """Withdraw the caller's vote.

        Raises:
            VoteNotFoundError: If the caller has not voted on the post
        """
        with _operation("post_service.unvote", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            return await self.post_repository.unvote(post, caller)
