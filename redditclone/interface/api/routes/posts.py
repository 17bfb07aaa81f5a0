"""Post routes.

Mutating routes require an ``Authorization: Bearer <token>`` header.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel

from redditclone.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
)
from redditclone.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsUseCase,
    PostResponse,
)
from redditclone.application.usecase.vote import (
    UnvoteRequest,
    UnvoteUseCase,
    VoteRequest,
    VoteUseCase,
)
from redditclone.domain.service import JWTService
from redditclone.domain.value import VoteDirection
from redditclone.interface.api.auth import require_caller
from redditclone.interface.error import http_errors

router = APIRouter(prefix="/api", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    type: str
    title: str
    category: str
    url: str | None = None
    text: str | None = None


class CreateCommentAPIRequest(BaseModel):
    """API request for commenting on a post."""

    comment: str


@router.get(
    "/posts/", response_model=list[PostResponse], response_model_exclude_none=True
)
@router.get(
    "/posts",
    response_model=list[PostResponse],
    response_model_exclude_none=True,
    include_in_schema=False,
)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
) -> list[PostResponse]:
    """List all posts, highest score first."""
    with http_errors("list_posts"):
        result = await list_posts_use_case.execute(ListPostsRequest())
        return result.posts


@router.post(
    "/posts",
    response_model=PostResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> PostResponse:
    """Create a new post.

    Requires authentication.

    Args:
        request: Post creation data
        create_post_use_case: Create post use case from DI
        jwt_service: JWT service from DI
        authorization: Bearer token header

    Returns:
        Created post

    Raises:
        HTTPException: If not authenticated or validation fails
    """
    caller = require_caller(jwt_service, authorization)

    with http_errors("create_post"):
        return await create_post_use_case.execute(
            CreatePostRequest(
                caller=caller,
                type=request.type,
                title=request.title,
                category=request.category,
                url=request.url,
                text=request.text,
            )
        )


@router.get(
    "/posts/{category}",
    response_model=list[PostResponse],
    response_model_exclude_none=True,
)
async def list_posts_by_category(
    category: str,
    list_posts_use_case: FromDishka[ListPostsUseCase],
) -> list[PostResponse]:
    """List posts of one category, highest score first."""
    with http_errors("list_posts_by_category"):
        result = await list_posts_use_case.execute(ListPostsRequest(category=category))
        return result.posts


@router.get(
    "/user/{login}",
    response_model=list[PostResponse],
    response_model_exclude_none=True,
)
async def list_posts_by_author(
    login: str,
    list_posts_use_case: FromDishka[ListPostsUseCase],
) -> list[PostResponse]:
    """List a user's posts, newest first."""
    with http_errors("list_posts_by_author"):
        result = await list_posts_use_case.execute(ListPostsRequest(author=login))
        return result.posts


@router.get(
    "/post/{post_id}", response_model=PostResponse, response_model_exclude_none=True
)
async def get_post(
    post_id: str,
    get_post_use_case: FromDishka[GetPostUseCase],
) -> PostResponse:
    """Get a post. Every successful call counts one view."""
    with http_errors("get_post"):
        return await get_post_use_case.execute(GetPostRequest(post_id=post_id))


@router.delete("/post/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: str,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> DeletePostResponse:
    """Delete a post. Requires authentication."""
    caller = require_caller(jwt_service, authorization)

    with http_errors("delete_post"):
        return await delete_post_use_case.execute(
            DeletePostRequest(caller=caller, post_id=post_id)
        )


@router.post(
    "/post/{post_id}",
    response_model=PostResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: str,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> PostResponse:
    """Comment on a post. Requires authentication.

    Returns:
        The post including the new comment
    """
    caller = require_caller(jwt_service, authorization)

    with http_errors("create_comment"):
        return await create_comment_use_case.execute(
            CreateCommentRequest(caller=caller, post_id=post_id, body=request.comment)
        )


@router.delete(
    "/post/{post_id}/{comment_id}",
    response_model=PostResponse,
    response_model_exclude_none=True,
)
async def delete_comment(
    post_id: str,
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> PostResponse:
    """Delete a comment. Requires authentication."""
    caller = require_caller(jwt_service, authorization)

    with http_errors("delete_comment"):
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(caller=caller, post_id=post_id, comment_id=comment_id)
        )


@router.get(
    "/post/{post_id}/upvote",
    response_model=PostResponse,
    response_model_exclude_none=True,
)
async def upvote(
    post_id: str,
    vote_use_case: FromDishka[VoteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> PostResponse:
    """Vote a post up. Requires authentication."""
    caller = require_caller(jwt_service, authorization)

    with http_errors("upvote"):
        return await vote_use_case.execute(
            VoteRequest(caller=caller, post_id=post_id, direction=VoteDirection.UP)
        )


@router.get(
    "/post/{post_id}/downvote",
    response_model=PostResponse,
    response_model_exclude_none=True,
)
async def downvote(
    post_id: str,
    vote_use_case: FromDishka[VoteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> PostResponse:
    """Vote a post down. Requires authentication."""
    caller = require_caller(jwt_service, authorization)

    with http_errors("downvote"):
        return await vote_use_case.execute(
            VoteRequest(caller=caller, post_id=post_id, direction=VoteDirection.DOWN)
        )


@router.get(
    "/post/{post_id}/unvote",
    response_model=PostResponse,
    response_model_exclude_none=True,
)
async def unvote(
    post_id: str,
    unvote_use_case: FromDishka[UnvoteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> PostResponse:
    """Withdraw the caller's vote. Requires authentication."""
    caller = require_caller(jwt_service, authorization)

    with http_errors("unvote"):
        return await unvote_use_case.execute(
            UnvoteRequest(caller=caller, post_id=post_id)
        )
