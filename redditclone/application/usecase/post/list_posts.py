"""List posts use case."""

from pydantic import BaseModel, model_validator

from redditclone.application.usecase.base import BaseUseCase
from redditclone.application.usecase.post.response import PostResponse
from redditclone.domain.service import PostService
from redditclone.domain.value import PostCategory


class ListPostsRequest(BaseModel):
    """List posts request.

    With neither filter set every post is listed. At most one filter may be
    given.
    """

    category: str | None = None  # Category name
    author: str | None = None  # Author login

    @model_validator(mode="after")
    def validate_single_filter(self) -> "ListPostsRequest":
        if self.category is not None and self.author is not None:
            raise ValueError("Filter by category or by author, not both")
        return self


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostResponse]


class ListPostsUseCase(BaseUseCase):
    """Use case for listing posts."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Category and global listings are ordered by score, author listings
        by creation time, newest first.

        Raises:
            InvalidCategoryError: If the category is unknown
        """
        if request.category is not None:
            category = PostCategory.parse(request.category)
            posts = await self.post_service.list_posts_by_category(category)
        elif request.author is not None:
            posts = await self.post_service.list_posts_by_author(request.author)
        else:
            posts = await self.post_service.list_posts()

        return ListPostsResponse(posts=[PostResponse.from_post(p) for p in posts])
