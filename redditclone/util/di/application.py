"""Application layer DI providers."""

from dishka import Scope, provide

from redditclone.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
)
from redditclone.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
)
from redditclone.application.usecase.vote import UnvoteUseCase, VoteUseCase
from redditclone.domain.service import PostService
from redditclone.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(self, post_service: PostService) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(self, post_service: PostService) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(self, post_service: PostService) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(self, post_service: PostService) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(post_service=post_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, post_service: PostService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, post_service: PostService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(post_service=post_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_vote_use_case(self, post_service: PostService) -> VoteUseCase:
        """Provide vote use case."""
        return VoteUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_unvote_use_case(self, post_service: PostService) -> UnvoteUseCase:
        """Provide unvote use case."""
        return UnvoteUseCase(post_service=post_service)
