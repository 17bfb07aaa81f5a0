"""Test configuration and fixtures."""

from uuid import uuid4

import logfire
import pytest

from redditclone.domain.value import (
    CallerIdentity,
    PostCategory,
    PostPayload,
    PostType,
    UserId,
)

# Keep telemetry local and quiet during tests
logfire.configure(send_to_logfire=False, console=False)


def make_identity(login: str) -> CallerIdentity:
    """Build a caller identity with a fresh user ID."""
    return CallerIdentity(login=login, id=UserId(str(uuid4())))


def text_payload(
    title: str = "Test Post",
    category: PostCategory = PostCategory.PROGRAMMING,
    text: str = "Test content",
) -> PostPayload:
    """Payload for a text post."""
    return PostPayload(type=PostType.TEXT, title=title, category=category, text=text)


def link_payload(
    url: str = "https://example.com/article",
    title: str = "Test Link",
    category: PostCategory = PostCategory.NEWS,
) -> PostPayload:
    """Payload for a link post."""
    return PostPayload(type=PostType.LINK, title=title, category=category, url=url)


@pytest.fixture
def alice() -> CallerIdentity:
    return make_identity("alice")


@pytest.fixture
def bob() -> CallerIdentity:
    return make_identity("bob")
