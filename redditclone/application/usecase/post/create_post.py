"""Create post use case."""

import logfire
from pydantic import BaseModel

from redditclone.application.usecase.base import BaseUseCase
from redditclone.application.usecase.post.response import PostResponse
from redditclone.domain.service import PostService
from redditclone.domain.value import (
    CallerIdentity,
    PostCategory,
    PostPayload,
    PostType,
)


class CreatePostRequest(BaseModel):
    """Create post request.

    ``type`` and ``category`` arrive as wire strings and are parsed here so
    unknown values surface as domain validation errors.
    """

    caller: CallerIdentity | None  # Authenticated user
    type: str
    title: str
    category: str
    url: str | None = None
    text: str | None = None


class CreatePostUseCase(BaseUseCase):
    """Use case for creating a new post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: CreatePostRequest) -> PostResponse:
        """Execute create post flow.

        Args:
            request: Create post request

        Returns:
            Created post

        Raises:
            InvalidPostTypeError: If the kind is not link or text
            InvalidCategoryError: If the category is unknown
            InvalidURLError: If a link post has a malformed URL
            InvalidPostTextError: If a text post has no text
            BadPayloadError: If no caller identity is attached
        """
        payload = PostPayload(
            type=PostType.parse(request.type),
            title=request.title,
            category=PostCategory.parse(request.category),
            url=request.url,
            text=request.text,
        )

        post = await self.post_service.create_post(request.caller, payload)
        logfire.info(
            "Post created successfully",
            post_id=str(post.id),
            type=post.type.value,
            category=post.category.value,
        )
        return PostResponse.from_post(post)
