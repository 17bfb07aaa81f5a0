"""In-memory post repository."""

import asyncio
from typing import Callable

from redditclone.domain.error import PostNotFoundError
from redditclone.domain.model import Post
from redditclone.domain.repository.post import PostRepository, require_identity
from redditclone.domain.value import (
    CallerIdentity,
    CommentId,
    PostCategory,
    PostId,
    PostPayload,
)


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository.

    Posts are kept in insertion order. Structural changes (create, delete)
    take the collection lock; a mutation holds the post's own lock while it
    re-applies the change to the stored post, so two voters on the same post
    are serialized while voters on different posts are not.
    """

    def __init__(self) -> None:
        self._posts: list[Post] = []
        self._lock = asyncio.Lock()
        self._post_locks: dict[PostId, asyncio.Lock] = {}

    async def find_all(self) -> list[Post]:
        """Find all posts, highest score first."""
        return self._by_score(self._posts)

    async def find_by_category(self, category: PostCategory) -> list[Post]:
        """Find posts in a category, highest score first."""
        return self._by_score([p for p in self._posts if p.category == category])

    async def find_by_author(self, login: str) -> list[Post]:
        """Find posts by author login, newest first."""
        matches = [
            (index, post)
            for index, post in enumerate(self._posts)
            if post.author.login == login
        ]
        matches.sort(key=lambda item: (item[1].created, item[0]), reverse=True)
        return [post.snapshot() for _, post in matches]

    async def find_by_id(self, post_id: PostId) -> Post:
        """Find a post by ID."""
        return self._stored(post_id).snapshot()

    async def create(self, payload: PostPayload, author: CallerIdentity | None) -> Post:
        """Create and store a post."""
        author = require_identity(author)
        post = Post.create(author, payload)
        async with self._lock:
            self._posts.append(post)
            self._post_locks[post.id] = asyncio.Lock()
        return post.snapshot()

    async def delete(self, post_id: PostId) -> None:
        """Delete a post."""
        async with self._lock:
            for index, post in enumerate(self._posts):
                if post.id == post_id:
                    del self._posts[index]
                    self._post_locks.pop(post_id, None)
                    return
        raise PostNotFoundError(post_id)

    async def add_comment(
        self, post: Post, author: CallerIdentity | None, body: str
    ) -> Post:
        """Append a comment and store it on the post."""
        author = require_identity(author)
        comment = post.add_comment(author, body)
        return await self._apply(post.id, lambda stored: stored.comments.append(comment))

    async def delete_comment(self, post: Post, comment_id: CommentId) -> Post:
        """Remove a comment from the post."""
        post.delete_comment(comment_id)
        return await self._apply(post.id, lambda stored: stored.delete_comment(comment_id))

    async def upvote(self, post: Post, voter: CallerIdentity | None) -> Post:
        """Vote the post up."""
        voter = require_identity(voter)
        post.upvote(voter.id)
        return await self._apply(post.id, lambda stored: stored.upvote(voter.id))

    async def downvote(self, post: Post, voter: CallerIdentity | None) -> Post:
        """Vote the post down."""
        voter = require_identity(voter)
        post.downvote(voter.id)
        return await self._apply(post.id, lambda stored: stored.downvote(voter.id))

    async def unvote(self, post: Post, voter: CallerIdentity | None) -> Post:
        """Withdraw the voter's vote."""
        voter = require_identity(voter)
        post.unvote(voter.id)
        return await self._apply(post.id, lambda stored: stored.unvote(voter.id))

    async def increment_views(self, post_id: PostId) -> None:
        """Atomically increment views by 1."""
        await self._apply(post_id, lambda stored: stored.increment_views())

    async def _apply(self, post_id: PostId, change: Callable[[Post], object]) -> Post:
        """Apply a change to the stored post under its lock.

        The change runs against the stored state, not the caller's copy, so
        a concurrent mutation that landed in between is kept.
        """
        lock = self._post_locks.get(post_id)
        if lock is None:
            raise PostNotFoundError(post_id)
        async with lock:
            stored = self._stored(post_id)
            change(stored)
            return stored.snapshot()

    def _stored(self, post_id: PostId) -> Post:
        for post in self._posts:
            if post.id == post_id:
                return post
        raise PostNotFoundError(post_id)

    @staticmethod
    def _by_score(posts: list[Post]) -> list[Post]:
        # sorted() is stable, so equal scores keep insertion order
        return [post.snapshot() for post in sorted(posts, key=lambda p: -p.score)]
