"""Get post use case."""

from pydantic import BaseModel, Field

from redditclone.application.usecase.base import BaseUseCase
from redditclone.application.usecase.post.response import PostResponse
from redditclone.domain.service import PostService
from redditclone.domain.value import UUID_LENGTH, PostId


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str = Field(min_length=UUID_LENGTH, max_length=UUID_LENGTH)


class GetPostUseCase(BaseUseCase):
    """Use case for opening a post, which counts as a view."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: GetPostRequest) -> PostResponse:
        """Execute get post flow.

        Raises:
            PostNotFoundError: If no post has this ID
        """
        post = await self.post_service.get_post(PostId(request.post_id))
        return PostResponse.from_post(post)
