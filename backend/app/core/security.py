"""
Security utilities for authentication and authorization.

Provides password hashing (scrypt) and JWT token management.
"""

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from jwt.exceptions import DecodeError, ExpiredSignatureError, InvalidSignatureError, InvalidTokenError

from app.core.config import settings

# scrypt cost parameters; changing them invalidates every stored digest
SCRYPT_N = 2**14
SCRYPT_R = 8
SCRYPT_P = 1
DERIVED_KEY_LENGTH = 64
SALT_LENGTH = 16
DIGEST_SEPARATOR = "."


class TokenError(Exception):
    """Base class for bearer token verification failures."""


class MalformedTokenError(TokenError):
    pass


class ExpiredTokenError(TokenError):
    pass


class BadSignatureError(TokenError):
    pass


def _derive_key(password: str, salt: bytes) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt,
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=DERIVED_KEY_LENGTH,
    )


def get_password_hash(password: str) -> str:
    """
    Hash a password with scrypt and a fresh random salt.

    Args:
        password: The plain text password to hash

    Returns:
        ``hex(derived_key) + "." + hex(salt)``
    """
    salt = secrets.token_bytes(SALT_LENGTH)
    derived = _derive_key(password, salt)
    return f"{derived.hex()}{DIGEST_SEPARATOR}{salt.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a stored scrypt digest.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The stored digest produced by ``get_password_hash``

    Returns:
        True if password matches, False otherwise (including when the
        stored digest is malformed)
    """
    if not isinstance(hashed_password, str) or not isinstance(plain_password, str):
        return False

    parts = hashed_password.split(DIGEST_SEPARATOR)
    if len(parts) != 2:
        return False

    try:
        expected = bytes.fromhex(parts[0])
        salt = bytes.fromhex(parts[1])
    except ValueError:
        return False

    if len(expected) != DERIVED_KEY_LENGTH or not salt:
        return False

    candidate = _derive_key(plain_password, salt)
    return hmac.compare_digest(candidate, expected)


def create_access_token(user: Any, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT access token for a user.

    Args:
        user: Anything exposing ``id``, ``username`` and ``role``
        expires_delta: Optional custom lifetime (defaults to
            ``ACCESS_TOKEN_EXPIRE_DAYS``)

    Returns:
        The encoded JWT token string
    """
    issued_at = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)

    to_encode = {
        "id": user.id,
        "username": user.username,
        "role": user.role,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict:
    """
    Decode and validate a JWT access token.

    Args:
        token: The JWT token string to decode

    Returns:
        The decoded claims ``{id, username, role, iat, exp}``

    Raises:
        MalformedTokenError, ExpiredTokenError, BadSignatureError
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "id", "username", "role"]},
        )
    except ExpiredSignatureError as exc:
        raise ExpiredTokenError("Token expired") from exc
    except InvalidSignatureError as exc:
        raise BadSignatureError("Token signature mismatch") from exc
    except (DecodeError, InvalidTokenError) as exc:
        raise MalformedTokenError("Token could not be decoded") from exc

    return payload
