"""Comment entity.

Comments live inside their post's ordered comment list; insertion order is
display order.
"""

from pydantic import Field

from redditclone.domain.model.common import DomainModel
from redditclone.domain.value import CallerIdentity, CommentId, new_id, utc_timestamp


class Comment(DomainModel):
    """Comment entity.

    The author is a snapshot of the commenter's identity at creation time.
    Body validation happens in the post service, not here.
    """

    id: CommentId = Field(default_factory=lambda: CommentId(new_id()))
    author: CallerIdentity
    body: str
    created: str = Field(default_factory=utc_timestamp)
