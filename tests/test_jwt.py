"""Token issuing and verification."""
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt as jose_jwt

from users_api.app.security.jwt import (
    ACCESS_TOKEN_LIFETIME,
    InvalidTokenError,
    UserClaims,
    create_access_token,
    decode_access_token,
)


def _claims(is_admin: bool = False) -> UserClaims:
    return UserClaims(id=uuid.uuid4(), login="Ivan01", is_admin=is_admin)


def test_token_carries_claims(settings):
    claims = _claims(is_admin=True)

    payload = decode_access_token(create_access_token(claims, settings), settings)

    assert payload.sub == claims.id
    assert payload.name == "Ivan01"
    assert payload.is_admin == "true"
    uuid.UUID(payload.jti)


def test_non_admin_flag(settings):
    payload = decode_access_token(create_access_token(_claims(), settings), settings)

    assert payload.is_admin == "false"


def test_each_token_gets_fresh_id(settings):
    claims = _claims()

    first = decode_access_token(create_access_token(claims, settings), settings)
    second = decode_access_token(create_access_token(claims, settings), settings)

    assert first.jti != second.jti


def test_token_expires_after_one_hour(settings):
    issued = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
    token = create_access_token(_claims(), settings, now=issued)

    raw = jose_jwt.get_unverified_claims(token)

    assert raw["exp"] - raw["iat"] == int(ACCESS_TOKEN_LIFETIME.total_seconds()) == 3600
    assert raw["iss"] == settings.JWT_ISSUER
    assert raw["aud"] == settings.JWT_AUDIENCE
    assert jose_jwt.get_unverified_header(token)["alg"] == "HS512"


def test_expired_token_rejected(settings):
    issued = datetime.now(timezone.utc) - timedelta(hours=2)
    token = create_access_token(_claims(), settings, now=issued)

    with pytest.raises(InvalidTokenError):
        decode_access_token(token, settings)


def test_wrong_secret_rejected(settings):
    token = create_access_token(_claims(), settings)
    other = settings.model_copy(update={"SECRET_KEY": "another-secret"})

    with pytest.raises(InvalidTokenError):
        decode_access_token(token, other)


@pytest.mark.parametrize("field", ["JWT_ISSUER", "JWT_AUDIENCE"])
def test_wrong_issuer_or_audience_rejected(settings, field):
    token = create_access_token(_claims(), settings)
    other = settings.model_copy(update={field: "someone-else"})

    with pytest.raises(InvalidTokenError):
        decode_access_token(token, other)


def test_garbage_rejected(settings):
    with pytest.raises(InvalidTokenError):
        decode_access_token("not-a-token", settings)
