"""Delete post use case."""

import logfire
from pydantic import BaseModel, Field

from redditclone.application.usecase.base import BaseUseCase
from redditclone.domain.service import PostService
from redditclone.domain.value import UUID_LENGTH, CallerIdentity, PostId


class DeletePostRequest(BaseModel):
    """Delete post request."""

    caller: CallerIdentity | None  # Authenticated user
    post_id: str = Field(min_length=UUID_LENGTH, max_length=UUID_LENGTH)


class DeletePostResponse(BaseModel):
    """Delete post response."""

    message: str = "success"


class DeletePostUseCase(BaseUseCase):
    """Use case for deleting a post.

    Any authenticated user may delete any post.
    """

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        Raises:
            PostNotFoundError: If no post has this ID
        """
        await self.post_service.delete_post(PostId(request.post_id))
        logfire.info(
            "Post deleted by user",
            post_id=request.post_id,
            login=request.caller.login if request.caller else None,
        )
        return DeletePostResponse()
