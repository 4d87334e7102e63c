# users_api/app/security/jwt.py
"""
Bearer token issuing and verification.

Tokens carry a fresh ``jti``, the user id as ``sub``, the login as ``name``
and an ``is_admin`` flag ("true"/"false"). They are HS512-signed, bound to the
configured issuer and audience, and expire one hour after issuance. There is
no refresh: an expired token means logging in again.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from pydantic import ValidationError

from users_api.app.core.config import Settings, get_settings
from users_api.app.schemas.user import TokenPayload

ACCESS_TOKEN_LIFETIME = timedelta(hours=1)


class InvalidTokenError(Exception):
    """Signature, issuer, audience, expiry or payload shape check failed."""


@dataclass(frozen=True)
class UserClaims:
    id: uuid.UUID
    login: str
    is_admin: bool


def create_access_token(
    claims: UserClaims,
    settings: Optional[Settings] = None,
    now: Optional[datetime] = None,
) -> str:
    config = settings or get_settings()
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "jti": str(uuid.uuid4()),
        "sub": str(claims.id),
        "name": claims.login,
        "is_admin": "true" if claims.is_admin else "false",
        "iss": config.JWT_ISSUER,
        "aud": config.JWT_AUDIENCE,
        "iat": issued_at,
        "exp": issued_at + ACCESS_TOKEN_LIFETIME,
    }
    return jwt.encode(payload, config.SECRET_KEY, algorithm=config.ALGORITHM)


def decode_access_token(token: str, settings: Optional[Settings] = None) -> TokenPayload:
    config = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            config.SECRET_KEY,
            algorithms=[config.ALGORITHM],
            audience=config.JWT_AUDIENCE,
            issuer=config.JWT_ISSUER,
        )
        return TokenPayload(**payload)
    except (JWTError, ValidationError) as exc:
        raise InvalidTokenError(str(exc)) from exc
