"""Post use cases."""

from .create_post import CreatePostRequest, CreatePostUseCase
from .delete_post import DeletePostRequest, DeletePostResponse, DeletePostUseCase
from .get_post import GetPostRequest, GetPostUseCase
from .list_posts import ListPostsRequest, ListPostsResponse, ListPostsUseCase
from .response import AuthorResponse, CommentResponse, PostResponse, VoteResponse

__all__ = [
    "AuthorResponse",
    "CommentResponse",
    "CreatePostRequest",
    "CreatePostUseCase",
    "DeletePostRequest",
    "DeletePostResponse",
    "DeletePostUseCase",
    "GetPostRequest",
    "GetPostUseCase",
    "ListPostsRequest",
    "ListPostsResponse",
    "ListPostsUseCase",
    "PostResponse",
    "VoteResponse",
]
