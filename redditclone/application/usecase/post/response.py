"""Post representation shared by the post, vote and comment use cases."""

from pydantic import BaseModel, ConfigDict, Field

from redditclone.domain.model import Comment, Post
from redditclone.domain.value import CallerIdentity, PostCategory, PostType


class AuthorResponse(BaseModel):
    """Author snapshot."""

    username: str
    id: str

    @classmethod
    def from_identity(cls, identity: CallerIdentity) -> "AuthorResponse":
        return cls(username=identity.login, id=str(identity.id))


class VoteResponse(BaseModel):
    """One ledger entry."""

    user: str
    vote: int


class CommentResponse(BaseModel):
    """Comment under a post."""

    created: str
    author: AuthorResponse
    body: str
    id: str

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentResponse":
        return cls(
            created=comment.created,
            author=AuthorResponse.from_identity(comment.author),
            body=comment.body,
            id=str(comment.id),
        )


class PostResponse(BaseModel):
    """Post as exchanged with clients.

    The vote ledger is flattened into a list of entries. ``url`` and
    ``text`` are None for the post type that does not carry them; routes
    drop None fields when serializing.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    score: int
    views: int
    type: PostType
    title: str
    url: str | None = None
    author: AuthorResponse
    category: PostCategory
    text: str | None = None
    votes: list[VoteResponse]
    comments: list[CommentResponse]
    created: str
    upvote_percentage: int = Field(alias="upvotePercentage")

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        """Build the response from a post aggregate."""
        return cls(
            id=str(post.id),
            score=post.score,
            views=post.views,
            type=post.type,
            title=post.title,
            url=post.url,
            author=AuthorResponse.from_identity(post.author),
            category=post.category,
            text=post.text,
            votes=[
                VoteResponse(user=str(vote.user), vote=vote.vote.value)
                for vote in post.votes.values()
            ],
            comments=[CommentResponse.from_comment(c) for c in post.comments],
            created=post.created,
            upvote_percentage=post.upvote_percentage,
        )
