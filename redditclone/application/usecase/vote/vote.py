"""Vote use case."""

import logfire
from pydantic import BaseModel, Field

from redditclone.application.usecase.base import BaseUseCase
from redditclone.application.usecase.post.response import PostResponse
from redditclone.domain.service import PostService
from redditclone.domain.value import UUID_LENGTH, CallerIdentity, PostId, VoteDirection


class VoteRequest(BaseModel):
    """Vote request."""

    caller: CallerIdentity | None  # Authenticated user
    post_id: str = Field(min_length=UUID_LENGTH, max_length=UUID_LENGTH)
    direction: VoteDirection


class VoteUseCase(BaseUseCase):
    """Use case for voting a post up or down.

    Repeating a vote in the same direction changes nothing; voting the
    other way flips the existing vote.
    """

    def __init__(self, post_service: PostService) -> None:
        """Initialize vote use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: VoteRequest) -> PostResponse:
        """Execute vote flow.

        Returns:
            Post after the vote

        Raises:
            PostNotFoundError: If no post has this ID
            BadPayloadError: If no caller identity is attached
        """
        post_id = PostId(request.post_id)
        if request.direction == VoteDirection.UP:
            post = await self.post_service.upvote(request.caller, post_id)
        else:
            post = await self.post_service.downvote(request.caller, post_id)

        logfire.info(
            "Vote recorded",
            post_id=request.post_id,
            direction=request.direction.value,
            score=post.score,
        )
        return PostResponse.from_post(post)
