"""Unvote use case."""

from pydantic import BaseModel, Field

from redditclone.application.usecase.base import BaseUseCase
from redditclone.application.usecase.post.response import PostResponse
from redditclone.domain.service import PostService
from redditclone.domain.value import UUID_LENGTH, CallerIdentity, PostId


class UnvoteRequest(BaseModel):
    """Unvote request."""

    caller: CallerIdentity | None  # Authenticated user
    post_id: str = Field(min_length=UUID_LENGTH, max_length=UUID_LENGTH)


class UnvoteUseCase(BaseUseCase):
    """Use case for withdrawing a vote."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: UnvoteRequest) -> PostResponse:
        """Execute unvote flow.

        Raises:
            PostNotFoundError: If no post has this ID
            VoteNotFoundError: If the caller has not voted
        """
        post = await self.post_service.unvote(request.caller, PostId(request.post_id))
        return PostResponse.from_post(post)
