"""Domain layer DI providers."""

from dishka import Scope, provide

from redditclone.config import AuthSettings
from redditclone.domain.repository import PostRepository
from redditclone.domain.service import JWTService, PostService
from redditclone.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)
