"""JWT token utilities.

Tokens are issued by the session service, which lives outside this
application. Only verification is needed to serve requests; ``create_token``
mirrors the issuer's claim layout for tooling and tests.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel, Field

from redditclone.config import AuthSettings
from redditclone.domain.value import CallerIdentity, UserId


class TokenUser(BaseModel):
    """User claim embedded in the token."""

    username: str = Field(min_length=1)
    id: str


class TokenPayload(BaseModel):
    """JWT token payload."""

    user: TokenUser
    iat: datetime
    exp: datetime

    def to_identity(self) -> CallerIdentity:
        """Caller identity carried by the token."""
        return CallerIdentity(login=self.user.username, id=UserId(self.user.id))


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(identity: CallerIdentity, settings: AuthSettings) -> str:
    """Create a JWT token for the user.

    Args:
        identity: User the token is issued to
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    issued = datetime.now(timezone.utc)
    payload = {
        "user": {"username": identity.login, "id": str(identity.id)},
        "iat": issued,
        "exp": issued + timedelta(days=settings.jwt_expiry_days),
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid, expired or lacks the user claim
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    try:
        return TokenPayload(**payload)
    except ValueError:
        raise JWTError("Invalid token payload")


def bearer_token(authorization: str | None) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header.

    Raises:
        JWTError: If the header is missing or not a bearer credential
    """
    if not authorization:
        raise JWTError("Authorization header is missing")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise JWTError("Authorization header must be a bearer token")
    return token.strip()
