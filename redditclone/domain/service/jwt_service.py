"""JWT token domain service."""

import logfire

from redditclone.config import AuthSettings
from redditclone.domain.value import CallerIdentity
from redditclone.util.jwt import JWTError, bearer_token, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service resolving the caller identity from a token."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, identity: CallerIdentity) -> str:
        """Create JWT token for a user."""
        with logfire.span("jwt_service.create_token", login=identity.login):
            return create_token(identity, self.auth_settings)

    def identify(self, authorization: str | None) -> CallerIdentity:
        """Resolve the caller from an Authorization header.

        Args:
            authorization: Raw ``Authorization`` header value

        Returns:
            Identity of the caller

        Raises:
            JWTError: If the header is missing or the token is invalid
        """
        with logfire.span("jwt_service.identify"):
            try:
                payload = verify_token(bearer_token(authorization), self.auth_settings)
            except JWTError as e:
                logfire.warn("Caller identification failed", error=str(e))
                raise

            identity = payload.to_identity()
            logfire.info("Caller identified", login=identity.login)
            return identity
