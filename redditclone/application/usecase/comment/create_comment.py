"""Create comment use case."""

import logfire
from pydantic import BaseModel, Field

from redditclone.application.usecase.base import BaseUseCase
from redditclone.application.usecase.post.response import PostResponse
from redditclone.domain.service import PostService
from redditclone.domain.value import UUID_LENGTH, CallerIdentity, PostId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    caller: CallerIdentity | None  # Authenticated user
    post_id: str = Field(min_length=UUID_LENGTH, max_length=UUID_LENGTH)
    body: str


class CreateCommentUseCase(BaseUseCase):
    """Use case for commenting on a post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize create comment use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: CreateCommentRequest) -> PostResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            Post including the new comment

        Raises:
            BadCommentBodyError: If the body is empty
            PostNotFoundError: If no post has this ID
        """
        post = await self.post_service.add_comment(
            request.caller, PostId(request.post_id), request.body
        )
        logfire.info(
            "Comment created successfully",
            post_id=request.post_id,
            comment_id=str(post.comments[-1].id) if post.comments else None,
        )
        return PostResponse.from_post(post)
