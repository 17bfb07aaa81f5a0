"""Caller identification for mutating routes."""

from fastapi import HTTPException, status

from redditclone.domain.service import JWTService
from redditclone.domain.value import CallerIdentity
from redditclone.util.jwt import JWTError


def require_caller(jwt_service: JWTService, authorization: str | None) -> CallerIdentity:
    """Resolve the caller from the Authorization header.

    Raises:
        HTTPException: 401 if the header is missing or the token is invalid
    """
    try:
        return jwt_service.identify(authorization)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
