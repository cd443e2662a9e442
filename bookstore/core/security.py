"""Password hashing and JWT issuance/validation for authentication."""

import uuid
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from bookstore.core.config import Settings, get_settings
from bookstore.core.errors import AuthenticationError, ConfigurationError
from bookstore.schemas.auth import CurrentUser

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 1
PASSWORD_MAX_LEN = 128

# Claims every access token must carry; decoding fails if one is absent.
REQUIRED_CLAIMS = ("sub", "jti", "uid", "roles", "iss", "aud", "iat", "exp")


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache
def dummy_password_hash() -> str:
    """Hash checked for unknown usernames so login timing does not reveal them."""
    return hash_password("bookstore-timing-dummy")


def signing_key(settings: Settings | None = None) -> str:
    """
    Return the JWT signing key.

    Raises ConfigurationError when JWT_SECRET is unset or blank; tokens are
    never issued or accepted without a key.
    """
    settings = settings or get_settings()
    if settings.JWT_SECRET is None:
        raise ConfigurationError("JWT_SECRET is not set.")
    secret = settings.JWT_SECRET.get_secret_value()
    if not secret or not secret.strip():
        raise ConfigurationError("JWT_SECRET must be non-empty.")
    return secret


def create_access_token(
    user_id: int,
    email: str,
    roles: Iterable[str],
    settings: Settings | None = None,
    now: datetime | None = None,
) -> str:
    """
    Create a signed JWT for a verified identity.

    Claims: sub (email), jti (fresh UUID), uid (user id), roles (one entry
    per role), iss and aud (JWT_ISSUER), iat, and exp = iat + JWT_EXPIRE_MINUTES.
    """
    settings = settings or get_settings()
    secret = signing_key(settings)
    issued_at = now or datetime.now(UTC)
    expire = issued_at + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": email,
        "jti": str(uuid.uuid4()),
        "uid": user_id,
        "roles": sorted(set(roles)),
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_ISSUER,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, settings: Settings | None = None) -> dict[str, Any]:
    """
    Decode and validate JWT; return its payload.
    Raises jwt.PyJWTError on a bad signature, wrong issuer/audience, expiry or missing claim.
    """
    settings = settings or get_settings()
    secret = signing_key(settings)
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        issuer=settings.JWT_ISSUER,
        audience=settings.JWT_ISSUER,
        options={"require": list(REQUIRED_CLAIMS)},
    )


def authenticate(token: str, settings: Settings | None = None) -> CurrentUser:
    """
    Validate a bearer token and return the identity and roles it carries.

    Stateless: no store lookup, validity depends only on signature, issuer
    and expiry. Raises AuthenticationError on any failure.
    """
    try:
        payload = decode_access_token(token, settings)
    except jwt.PyJWTError as e:
        raise AuthenticationError("Invalid or expired token") from e

    roles = payload.get("roles")
    if not isinstance(roles, list) or not all(isinstance(r, str) for r in roles):
        raise AuthenticationError("Invalid token payload")
    user_id = payload.get("uid")
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise AuthenticationError("Invalid token payload")
    return CurrentUser(id=user_id, email=payload["sub"], roles=roles)
