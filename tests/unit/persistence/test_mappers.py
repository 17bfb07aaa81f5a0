"""Tests for row and document mappers."""

import pytest

from redditclone.domain.error import StorageError
from redditclone.domain.model import Post
from redditclone.persistence.mappers import (
    comment_to_doc,
    load_post,
    post_to_dict,
    row_to_post,
    vote_to_doc,
)
from tests.conftest import link_payload, text_payload


class TestPostToDict:
    """Posts map to a single row with embedded documents."""

    def test_text_post_has_no_url(self, alice):
        # Arrange
        post = Post.create(alice, text_payload())

        # Act
        data = post_to_dict(post)

        # Assert
        assert "url" not in data
        assert data["text"] == "Test content"
        assert data["vote_count"] == 1
        assert data["author"] == {"login": "alice", "id": str(alice.id)}
        assert data["votes"] == {str(alice.id): {"user": str(alice.id), "vote": 1}}
        assert "seq" not in data

    def test_link_post_has_no_text(self, alice):
        post = Post.create(alice, link_payload())

        data = post_to_dict(post)

        assert "text" not in data
        assert data["url"] == "https://example.com/article"
        assert data["type"] == "link"
        assert data["category"] == "news"


class TestRowToPost:
    def test_row_round_trips_the_aggregate(self, alice, bob):
        # Arrange
        post = Post.create(alice, text_payload())
        post.downvote(bob.id)
        post.add_comment(bob, "first")
        row = post_to_dict(post) | {"seq": 7, "url": None}

        # Act
        restored = row_to_post(row)

        # Assert
        assert restored == post
        assert restored.votes.get(bob.id).vote.value == -1
        assert restored.comments[0].author == bob


class TestLoadPost:
    """Rows that break the aggregate's invariants are storage faults."""

    def test_valid_row(self, alice):
        post = Post.create(alice, text_payload())

        assert load_post(post_to_dict(post), "post_repository.find_by_id") == post

    def test_out_of_range_percentage(self, alice):
        # Arrange - score drifted away from the ledger
        post = Post.create(alice, text_payload())
        row = post_to_dict(post) | {"score": 3, "upvote_percentage": 150}

        # Act
        with pytest.raises(StorageError) as exc_info:
            load_post(row, "post_repository.find_by_id")

        # Assert
        assert exc_info.value.operation == "post_repository.find_by_id"
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_unknown_category(self, alice):
        post = Post.create(alice, text_payload())
        row = post_to_dict(post) | {"category": "cooking"}

        with pytest.raises(StorageError):
            load_post(row, "post_repository.find_all")

class TestEmbeddedDocuments:
    def test_vote_document(self, alice):
        post = Post.create(alice, text_payload())

        doc = vote_to_doc(post.votes.get(alice.id))

        assert doc == {"user": str(alice.id), "vote": 1}

    def test_comment_document(self, alice, bob):
        post = Post.create(alice, text_payload())
        comment = post.add_comment(bob, "hello")

        doc = comment_to_doc(comment)

        assert doc == {
            "id": str(comment.id),
            "author": {"login": "bob", "id": str(bob.id)},
            "body": "hello",
            "created": comment.created,
        }
