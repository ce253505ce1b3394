"""Tests for the JWT token manager."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from jose import jwt

from blog_api.configs import settings
from blog_api.managers.token_manager import (
    create_access_token,
    decode_access_token,
)


def encode(claims: dict[str, object], secret: str | None = None) -> str:
    return jwt.encode(
        claims,
        secret or settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def expiry_of(token: str) -> datetime:
    return datetime.fromtimestamp(jwt.get_unverified_claims(token)["exp"], tz=UTC)


def valid_claims(**overrides: object) -> dict[str, object]:
    now = datetime.now(UTC)
    claims: dict[str, object] = {
        "sub": str(uuid4()),
        "jti": str(uuid4()),
        "iat": now,
        "exp": now + timedelta(minutes=5),
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "type": "access",
    }
    claims.update(overrides)
    return claims


class TestCreateAccessToken:
    """Test cases for create_access_token function."""

    def test_token_contains_correct_claims(self) -> None:
        """Test that access token carries the user id as subject."""
        user_id = uuid4()

        token_data = decode_access_token(create_access_token(user_id=user_id))

        assert token_data is not None
        assert token_data.user_id == user_id
        assert token_data.token_type == "access"
        assert token_data.jti

    def test_each_token_has_unique_jti(self) -> None:
        user_id = uuid4()

        first = decode_access_token(create_access_token(user_id=user_id))
        second = decode_access_token(create_access_token(user_id=user_id))

        assert first is not None
        assert second is not None
        assert first.jti != second.jti

    def test_custom_expiration(self) -> None:
        """Test that custom expiration is respected."""
        before = datetime.now(UTC)

        token = create_access_token(user_id=uuid4(), expires_delta=timedelta(hours=2))

        expiry = expiry_of(token)
        assert expiry - before > timedelta(minutes=119)

    def test_default_expiration(self) -> None:
        before = datetime.now(UTC)

        expiry = expiry_of(create_access_token(user_id=uuid4()))

        expected = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        assert expiry - before <= expected + timedelta(seconds=1)


class TestDecodeAccessToken:
    """Test cases for decode_access_token function."""

    def test_garbage_token(self) -> None:
        assert decode_access_token("not.a.jwt") is None

    def test_wrong_secret(self) -> None:
        assert decode_access_token(encode(valid_claims(), secret="another-secret")) is None

    def test_expired_token(self) -> None:
        token = create_access_token(user_id=uuid4(), expires_delta=timedelta(seconds=-1))

        assert decode_access_token(token) is None

    def test_wrong_audience(self) -> None:
        assert decode_access_token(encode(valid_claims(aud="someone-else"))) is None

    def test_wrong_issuer(self) -> None:
        assert decode_access_token(encode(valid_claims(iss="someone-else"))) is None

    def test_wrong_token_type(self) -> None:
        assert decode_access_token(encode(valid_claims(type="refresh"))) is None

    def test_subject_must_be_uuid(self) -> None:
        assert decode_access_token(encode(valid_claims(sub="ada"))) is None

    def test_missing_jti(self) -> None:
        claims = valid_claims()
        del claims["jti"]

        assert decode_access_token(encode(claims)) is None

