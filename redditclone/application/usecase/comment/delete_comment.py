"""Delete comment use case."""

from pydantic import BaseModel, Field

from redditclone.application.usecase.base import BaseUseCase
from redditclone.application.usecase.post.response import PostResponse
from redditclone.domain.service import PostService
from redditclone.domain.value import UUID_LENGTH, CallerIdentity, CommentId, PostId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    caller: CallerIdentity | None  # Authenticated user
    post_id: str = Field(min_length=UUID_LENGTH, max_length=UUID_LENGTH)
    comment_id: str = Field(min_length=UUID_LENGTH, max_length=UUID_LENGTH)


class DeleteCommentUseCase(BaseUseCase):
    """Use case for removing a comment from a post."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: DeleteCommentRequest) -> PostResponse:
        """Execute delete comment flow.

        Raises:
            PostNotFoundError: If no post has this ID
            CommentNotFoundError: If the post has no such comment
        """
        post = await self.post_service.delete_comment(
            PostId(request.post_id), CommentId(request.comment_id)
        )
        return PostResponse.from_post(post)
