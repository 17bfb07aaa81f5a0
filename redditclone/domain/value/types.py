"""Domain value objects for redditclone.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and the wire names used by the REST layer.
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import Field

from redditclone.domain.error import InvalidCategoryError, InvalidPostTypeError
from redditclone.domain.value.common import ValueObject
from redditclone.domain.value.identifiers import UserId

URL_PATTERN = re.compile(
    r"((([A-Za-z]{3,9}:(?://)?)(?:[-;:&=+$,\w]+@)?[A-Za-z0-9.-]+(:[0-9]+)?"
    r"|(?:www\.|[-;:&=+$,\w]+@)[A-Za-z0-9.-]+)"
    r"((?:/[+~%/.\w-]*)?\??(?:[-+=&;%@.\w]*)#?\w*)?)"
)


def is_valid_url(url: Optional[str]) -> bool:
    """Check a URL against the accepted link shape."""
    if not url:
        return False
    return URL_PATTERN.fullmatch(url) is not None


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """Format a creation timestamp.

    ISO-8601 in UTC with exactly three fractional digits and a ``Z`` suffix,
    e.g. ``2024-02-20T10:21:04.716Z``. Fixed width keeps the strings sortable.
    """
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class PostCategory(str, Enum):
    """Closed set of categories a post belongs to."""

    MUSIC = "music"
    FUNNY = "funny"
    VIDEOS = "videos"
    PROGRAMMING = "programming"
    NEWS = "news"
    FASHION = "fashion"

    @classmethod
    def parse(cls, value: str) -> "PostCategory":
        """Parse a lowercase category name.

        Raises:
            InvalidCategoryError: If the name is not a known category
        """
        try:
            return cls(value)
        except ValueError:
            raise InvalidCategoryError(value) from None


class PostType(str, Enum):
    """Kind of post: external link or self text."""

    LINK = "link"
    TEXT = "text"

    @classmethod
    def parse(cls, value: str) -> "PostType":
        """Parse a post kind name.

        Raises:
            InvalidPostTypeError: If the name is not ``link`` or ``text``
        """
        try:
            return cls(value)
        except ValueError:
            raise InvalidPostTypeError(value) from None


class VoteDirection(int, Enum):
    """Direction of a vote: +1 for up, -1 for down."""

    UP = 1
    DOWN = -1


class CallerIdentity(ValueObject):
    """Authenticated user attached to a mutating request.

    Also embedded in posts and comments as the author snapshot, so a later
    rename of the user never rewrites existing content.
    """

    login: str = Field(min_length=1)
    id: UserId


class PostPayload(ValueObject):
    """Input for creating a post. Never persisted as-is."""

    type: PostType
    title: str
    category: PostCategory
    url: Optional[str] = None
    text: Optional[str] = None
