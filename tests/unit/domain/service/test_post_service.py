"""Unit tests for PostService."""

from uuid import uuid4

import pytest

from redditclone.domain.error import (
    BadCommentBodyError,
    BadPayloadError,
    CommentNotFoundError,
    InvalidURLError,
    PostNotFoundError,
    StorageError,
    VoteNotFoundError,
)
from redditclone.domain.repository import PostRepository
from redditclone.domain.service import PostService
from redditclone.domain.value import PostCategory, PostId
from redditclone.persistence.repository.inmemory import InMemoryPostRepository
from tests.conftest import link_payload, text_payload
from tests.harness import create_env_fixture

# Unit test fixture - in-memory store, no docker needed
unit_env = create_env_fixture()


class FailingViewsRepository(InMemoryPostRepository):
    """Store whose view counter is unavailable."""

    async def increment_views(self, post_id: PostId) -> None:
        raise StorageError("post_repository.increment_views")


class FailingListRepository(InMemoryPostRepository):
    """Store whose listing query fails."""

    async def find_all(self):
        try:
            raise ConnectionError("connection reset")
        except ConnectionError as e:
            raise StorageError("post_repository.find_all") from e


class TestCreatePost:
    """Tests for create_post."""

    @pytest.mark.asyncio
    async def test_create_text_post(self, unit_env, alice):
        # Arrange
        post_service = await unit_env.get(PostService)

        # Act
        post = await post_service.create_post(alice, text_payload())

        # Assert
        stored = await post_service.post_repository.find_by_id(post.id)
        assert stored.score == 1
        assert stored.views >= 1
        assert [v.user for v in stored.votes.values()] == [alice.id]
        assert stored.upvote_percentage == 100
        assert stored.comments == []

    @pytest.mark.asyncio
    async def test_invalid_url_fails_before_store(self, unit_env, alice):
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)

        # Act & Assert
        with pytest.raises(InvalidURLError) as exc_info:
            await post_service.create_post(alice, link_payload(url="not a url"))

        assert "post_service.create_post" in exc_info.value.__notes__
        assert await post_repo.find_all() == []

    @pytest.mark.asyncio
    async def test_missing_caller_is_bad_payload(self, unit_env):
        post_service = await unit_env.get(PostService)

        with pytest.raises(BadPayloadError):
            await post_service.create_post(None, text_payload())


class TestGetPost:
    """Tests for get_post."""

    @pytest.mark.asyncio
    async def test_get_post_counts_a_view(self, unit_env, alice):
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_service.create_post(alice, text_payload())

        # Act
        first = await post_service.get_post(post.id)
        second = await post_service.get_post(post.id)

        # Assert
        assert first.views == 2
        assert second.views == 3
        assert (await post_repo.find_by_id(post.id)).views == 3

    @pytest.mark.asyncio
    async def test_get_missing_post_raises(self, unit_env):
        post_service = await unit_env.get(PostService)

        with pytest.raises(PostNotFoundError):
            await post_service.get_post(PostId(str(uuid4())))

    @pytest.mark.asyncio
    async def test_view_increment_failure_is_ignored(self, alice):
        # Arrange
        post_repo = FailingViewsRepository()
        post_service = PostService(post_repository=post_repo)
        post = await post_service.create_post(alice, text_payload())

        # Act
        result = await post_service.get_post(post.id)

        # Assert - the returned post still shows this view
        assert result.views == 2
        assert (await post_repo.find_by_id(post.id)).views == 1


class TestListPosts:
    """Tests for the listing operations."""

    @pytest.mark.asyncio
    async def test_list_by_category_orders_by_score(self, unit_env, alice, bob):
        # Arrange
        post_service = await unit_env.get(PostService)
        first = await post_service.create_post(
            alice, text_payload(title="first", category=PostCategory.MUSIC)
        )
        second = await post_service.create_post(
            alice, text_payload(title="second", category=PostCategory.MUSIC)
        )
        third = await post_service.create_post(
            alice, text_payload(title="third", category=PostCategory.MUSIC)
        )
        await post_service.create_post(
            alice, text_payload(title="elsewhere", category=PostCategory.NEWS)
        )
        await post_service.upvote(bob, third.id)

        # Act
        posts = await post_service.list_posts_by_category(PostCategory.MUSIC)

        # Assert - highest score first, ties keep creation order
        assert [p.id for p in posts] == [third.id, first.id, second.id]

    @pytest.mark.asyncio
    async def test_list_by_author_newest_first(self, unit_env, alice, bob):
        post_service = await unit_env.get(PostService)
        older = await post_service.create_post(alice, text_payload(title="older"))
        await post_service.create_post(bob, text_payload(title="not alice"))
        newer = await post_service.create_post(alice, text_payload(title="newer"))

        posts = await post_service.list_posts_by_author("alice")

        assert [p.id for p in posts] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_storage_failure_is_wrapped(self):
        # Arrange
        post_service = PostService(post_repository=FailingListRepository())

        # Act
        with pytest.raises(StorageError) as exc_info:
            await post_service.list_posts()

        # Assert - each layer adds one link to the chain
        error = exc_info.value
        assert error.operation == "post_service.list_posts"
        assert isinstance(error.__cause__, StorageError)
        assert error.__cause__.operation == "post_repository.find_all"
        assert isinstance(error.__cause__.__cause__, ConnectionError)


class TestDeletePost:
    @pytest.mark.asyncio
    async def test_delete_twice_raises_not_found(self, unit_env, alice):
        # Arrange
        post_service = await unit_env.get(PostService)
        post = await post_service.create_post(alice, text_payload())

        # Act
        await post_service.delete_post(post.id)

        # Assert
        with pytest.raises(PostNotFoundError):
            await post_service.delete_post(post.id)
        assert await post_service.list_posts() == []


class TestComments:
    """Tests for add_comment and delete_comment."""

    @pytest.mark.asyncio
    async def test_add_comment(self, unit_env, alice, bob):
        post_service = await unit_env.get(PostService)
        post = await post_service.create_post(alice, text_payload())

        updated = await post_service.add_comment(bob, post.id, "Nice post")

        assert len(updated.comments) == 1
        assert updated.comments[0].body == "Nice post"
        assert updated.comments[0].author == bob

    @pytest.mark.asyncio
    async def test_empty_comment_is_rejected(self, unit_env, alice, bob):
        # Arrange
        post_service = await unit_env.get(PostService)
        post = await post_service.create_post(alice, text_payload())

        # Act & Assert
        with pytest.raises(BadCommentBodyError):
            await post_service.add_comment(bob, post.id, "")

        stored = await post_service.post_repository.find_by_id(post.id)
        assert stored.comments == []

    @pytest.mark.asyncio
    async def test_comment_on_missing_post_raises(self, unit_env, bob):
        post_service = await unit_env.get(PostService)

        with pytest.raises(PostNotFoundError):
            await post_service.add_comment(bob, PostId(str(uuid4())), "hello")

    @pytest.mark.asyncio
    async def test_delete_missing_comment_keeps_comments(self, unit_env, alice, bob):
        # Arrange
        post_service = await unit_env.get(PostService)
        post = await post_service.create_post(alice, text_payload())
        await post_service.add_comment(bob, post.id, "hello")

        # Act
        with pytest.raises(CommentNotFoundError) as exc_info:
            await post_service.delete_comment(post.id, str(uuid4()))

        # Assert
        assert "post_service.delete_comment" in exc_info.value.__notes__
        stored = await post_service.post_repository.find_by_id(post.id)
        assert len(stored.comments) == 1

    @pytest.mark.asyncio
    async def test_delete_comment(self, unit_env, alice, bob):
        post_service = await unit_env.get(PostService)
        post = await post_service.create_post(alice, text_payload())
        commented = await post_service.add_comment(bob, post.id, "hello")

        updated = await post_service.delete_comment(post.id, commented.comments[0].id)

        assert updated.comments == []


class TestVotes:
    """Tests for upvote, downvote and unvote."""

    @pytest.mark.asyncio
    async def test_upvote_then_downvote(self, unit_env, alice, bob):
        # Arrange
        post_service = await unit_env.get(PostService)
        post = await post_service.create_post(alice, text_payload())

        # Act
        upvoted = await post_service.upvote(bob, post.id)
        downvoted = await post_service.downvote(bob, post.id)

        # Assert
        assert upvoted.score == 2
        assert downvoted.score == 0
        assert downvoted.votes.get(bob.id).vote.value == -1
        assert downvoted.upvote_percentage == 50

    @pytest.mark.asyncio
    async def test_unvote_without_vote_raises(self, unit_env, alice, bob):
        post_service = await unit_env.get(PostService)
        post = await post_service.create_post(alice, text_payload())

        with pytest.raises(VoteNotFoundError):
            await post_service.unvote(bob, post.id)

    @pytest.mark.asyncio
    async def test_unvote_restores_score(self, unit_env, alice, bob):
        post_service = await unit_env.get(PostService)
        post = await post_service.create_post(alice, text_payload())
        await post_service.downvote(bob, post.id)

        restored = await post_service.unvote(bob, post.id)

        assert restored.score == 1
        assert len(restored.votes) == 1

    @pytest.mark.asyncio
    async def test_vote_without_caller_is_bad_payload(self, unit_env, alice):
        post_service = await unit_env.get(PostService)
        post = await post_service.create_post(alice, text_payload())

        with pytest.raises(BadPayloadError):
            await post_service.upvote(None, post.id)
