"""
Password hashing and bearer token helpers.

Passwords are hashed with passlib and access tokens are signed JWTs produced
with python-jose. Token settings come from the server configuration.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from jobdispatch.core.errors import AuthenticationError
from jobdispatch.server.core.config import settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


@dataclass(frozen=True)
class AccessToken:
    """A freshly issued bearer token."""

    token: str
    expires_at: datetime


@dataclass(frozen=True)
class TokenClaims:
    """Claims extracted from a verified bearer token."""

    user_id: str
    role: str


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def generate_temporary_password() -> str:
    """Generate a password that satisfies the registration strength rules."""
    return f"Tmp-{secrets.token_urlsafe(9)}7a"


def create_access_token(user_id: str, role: str, expires_delta: Optional[timedelta] = None) -> AccessToken:
    """Issue a signed access token for a user.

    Args:
        user_id: The user id stored in the ``sub`` claim
        role: The user role stored in the ``role`` claim
        expires_delta: Optional lifetime override

    Returns:
        AccessToken with the encoded token and its expiry (naive UTC)
    """
    auth = settings.auth
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=auth.access_token_expire_minutes))
    payload = {"sub": user_id, "role": role, "exp": expire}
    token = jwt.encode(payload, auth.jwt_secret, algorithm=auth.jwt_algorithm)
    return AccessToken(token=token, expires_at=expire.replace(tzinfo=None))


def decode_access_token(token: str) -> TokenClaims:
    """Verify a bearer token and return its claims.

    Raises:
        AuthenticationError: If the token is malformed, expired or missing claims
    """
    auth = settings.auth
    try:
        payload = jwt.decode(token, auth.jwt_secret, algorithms=[auth.jwt_algorithm])
    except JWTError as e:
        raise AuthenticationError("Invalid or expired token") from e

    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or not role:
        raise AuthenticationError("Invalid or expired token")
    return TokenClaims(user_id=user_id, role=role)
