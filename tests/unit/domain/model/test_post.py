"""Unit tests for the Post aggregate and its vote ledger."""

from datetime import datetime, timezone

import pytest

from redditclone.domain.error import (
    CommentNotFoundError,
    InvalidPostTextError,
    InvalidURLError,
    VoteNotFoundError,
)
from redditclone.domain.model import Post, upvote_percentage
from redditclone.domain.value import PostType, VoteDirection
from tests.conftest import link_payload, make_identity, text_payload


def assert_percentage_consistent(post: Post) -> None:
    assert post.upvote_percentage == upvote_percentage(post.score, len(post.votes))


class TestUpvotePercentage:
    """Tests for the percentage formula."""

    def test_no_votes_is_zero(self):
        assert upvote_percentage(0, 0) == 0

    def test_rounds_down(self):
        # 2 up, 1 down: 66.67%
        assert upvote_percentage(1, 3) == 66

    def test_all_down_is_zero(self):
        assert upvote_percentage(-2, 2) == 0


class TestCreatePost:
    """Tests for Post.create."""

    def test_text_post_starts_with_author_upvote(self, alice):
        # Act
        post = Post.create(alice, text_payload())

        # Assert
        assert post.score == 1
        assert post.views == 1
        assert post.upvote_percentage == 100
        assert post.comments == []
        assert len(post.votes) == 1
        vote = post.votes.get(alice.id)
        assert vote.user == alice.id
        assert vote.vote == VoteDirection.UP
        assert post.url is None
        assert post.author == alice

    def test_link_post_keeps_url_and_drops_text(self, alice):
        payload = link_payload().model_copy(update={"text": "ignored"})

        post = Post.create(alice, payload)

        assert post.type == PostType.LINK
        assert post.url == "https://example.com/article"
        assert post.text is None

    def test_link_post_with_malformed_url_raises(self, alice):
        with pytest.raises(InvalidURLError):
            Post.create(alice, link_payload(url="not a url"))

    def test_text_post_without_text_raises(self, alice):
        with pytest.raises(InvalidPostTextError):
            Post.create(alice, text_payload(text=""))

    def test_created_timestamp_has_millisecond_precision(self, alice):
        now = datetime(2024, 2, 20, 10, 21, 4, 716123, tzinfo=timezone.utc)

        post = Post.create(alice, text_payload(), now=now)

        assert post.created == "2024-02-20T10:21:04.716Z"

    def test_ids_are_uuid_strings(self, alice):
        post = Post.create(alice, text_payload())

        assert len(post.id) == 36
        assert post.id != Post.create(alice, text_payload()).id


class TestVoting:
    """Tests for upvote, downvote and unvote."""

    def test_upvote_twice_equals_once(self, alice, bob):
        # Arrange
        post = Post.create(alice, text_payload())

        # Act
        _, created_first = post.upvote(bob.id)
        score_after_first = post.score
        _, created_second = post.upvote(bob.id)

        # Assert
        assert created_first is True
        assert created_second is False
        assert post.score == score_after_first == 2
        assert len(post.votes) == 2
        assert_percentage_consistent(post)

    def test_upvote_then_downvote_flips_the_vote(self, alice, bob):
        post = Post.create(alice, text_payload())
        post.upvote(bob.id)

        vote, created = post.downvote(bob.id)

        assert created is False
        assert vote.vote == VoteDirection.DOWN
        assert post.score == 0
        assert post.votes.get(bob.id).vote == VoteDirection.DOWN
        assert post.upvote_percentage == 50

    def test_author_can_downvote_own_post(self, alice):
        post = Post.create(alice, text_payload())

        post.downvote(alice.id)

        assert post.score == -1
        assert len(post.votes) == 1
        assert post.upvote_percentage == 0

    def test_unvote_without_vote_raises(self, alice, bob):
        post = Post.create(alice, text_payload())

        with pytest.raises(VoteNotFoundError):
            post.unvote(bob.id)

        assert post.score == 1
        assert len(post.votes) == 1

    def test_unvote_restores_score(self, alice, bob):
        post = Post.create(alice, text_payload())
        post.downvote(bob.id)

        removed = post.unvote(bob.id)

        assert removed.vote == VoteDirection.DOWN
        assert post.score == 1
        assert bob.id not in post.votes
        assert post.upvote_percentage == 100

    def test_unvote_last_vote_gives_zero_percent(self, alice):
        post = Post.create(alice, text_payload())

        post.unvote(alice.id)

        assert post.score == 0
        assert len(post.votes) == 0
        assert post.upvote_percentage == 0

    def test_percentage_invariant_after_vote_sequence(self, alice):
        # Arrange
        post = Post.create(alice, text_payload())
        voters = [make_identity(f"voter{i}") for i in range(6)]

        # Act - mixed sequence of casts, flips and retractions
        for index, voter in enumerate(voters):
            if index % 2:
                post.downvote(voter.id)
            else:
                post.upvote(voter.id)
            assert_percentage_consistent(post)
        post.upvote(voters[1].id)
        assert_percentage_consistent(post)
        post.unvote(voters[2].id)
        assert_percentage_consistent(post)

        # Assert - score equals the sum of ledger entries
        assert post.score == sum(v.vote.value for v in post.votes.values())


class TestComments:
    """Tests for comment add and delete."""

    def test_add_comment_appends_in_order(self, alice, bob):
        post = Post.create(alice, text_payload())

        first = post.add_comment(bob, "first")
        second = post.add_comment(alice, "second")

        assert [c.id for c in post.comments] == [first.id, second.id]
        assert first.author == bob
        assert len(first.id) == 36

    def test_delete_comment_removes_only_the_match(self, alice, bob):
        post = Post.create(alice, text_payload())
        keep = post.add_comment(bob, "keep")
        drop = post.add_comment(bob, "drop")

        removed = post.delete_comment(drop.id)

        assert removed == drop
        assert post.comments == [keep]

    def test_delete_missing_comment_raises(self, alice, bob):
        post = Post.create(alice, text_payload())
        post.add_comment(bob, "hello")

        with pytest.raises(CommentNotFoundError):
            post.delete_comment("00000000-0000-0000-0000-000000000000")

        assert len(post.comments) == 1


class TestSnapshot:
    def test_snapshot_shares_no_state(self, alice, bob):
        post = Post.create(alice, text_payload())

        copy = post.snapshot()
        copy.upvote(bob.id)
        copy.add_comment(bob, "only on the copy")

        assert post.score == 1
        assert len(post.votes) == 1
        assert post.comments == []
