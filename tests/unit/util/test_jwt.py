"""Unit tests for token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from redditclone.config import AuthSettings
from redditclone.domain.service import JWTService
from redditclone.util.jwt import JWTError, bearer_token, create_token, verify_token

SETTINGS = AuthSettings(jwt_secret="test-secret")


class TestTokens:
    """Tests for create_token and verify_token."""

    def test_token_round_trip(self, alice):
        # Arrange
        token = create_token(alice, SETTINGS)

        # Act
        payload = verify_token(token, SETTINGS)

        # Assert
        assert payload.user.username == "alice"
        assert payload.to_identity() == alice

    def test_wrong_secret(self, alice):
        token = create_token(alice, AuthSettings(jwt_secret="other-secret"))

        with pytest.raises(JWTError, match="Invalid token"):
            verify_token(token, SETTINGS)

    def test_expired_token(self, alice):
        # Arrange
        issued = datetime.now(timezone.utc) - timedelta(days=2)
        token = jwt.encode(
            {
                "user": {"username": alice.login, "id": str(alice.id)},
                "iat": issued,
                "exp": issued + timedelta(days=1),
            },
            SETTINGS.jwt_secret,
            algorithm="HS256",
        )

        # Act & Assert
        with pytest.raises(JWTError, match="expired"):
            verify_token(token, SETTINGS)

    def test_missing_user_claim(self):
        issued = datetime.now(timezone.utc)
        token = jwt.encode(
            {"iat": issued, "exp": issued + timedelta(days=1)},
            SETTINGS.jwt_secret,
            algorithm="HS256",
        )

        with pytest.raises(JWTError, match="payload"):
            verify_token(token, SETTINGS)

    def test_missing_expiry(self, alice):
        token = jwt.encode(
            {"user": {"username": alice.login, "id": str(alice.id)}},
            SETTINGS.jwt_secret,
            algorithm="HS256",
        )

        with pytest.raises(JWTError):
            verify_token(token, SETTINGS)


class TestBearerToken:
    @pytest.mark.parametrize("header", [None, "", "Basic abc", "Bearer ", "token"])
    def test_rejects_non_bearer(self, header):
        with pytest.raises(JWTError):
            bearer_token(header)

    def test_extracts_token(self):
        assert bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"
        assert bearer_token("bearer abc") == "abc"


class TestJWTService:
    def test_identify(self, alice):
        service = JWTService(SETTINGS)
        token = service.create_token(alice)

        assert service.identify(f"Bearer {token}") == alice

    def test_identify_without_header(self):
        service = JWTService(SETTINGS)

        with pytest.raises(JWTError):
            service.identify(None)
