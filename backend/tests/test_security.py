from __future__ import annotations

from datetime import timedelta
from types import SimpleNamespace

import jwt
import pytest

from app.core.config import settings
from app.core.security import (
    BadSignatureError,
    DERIVED_KEY_LENGTH,
    ExpiredTokenError,
    MalformedTokenError,
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)

USER = SimpleNamespace(id=7, username="alice", role="hr")


def test_password_hash_has_key_and_salt_parts() -> None:
    digest = get_password_hash("correct horse")
    key_hex, salt_hex = digest.split(".")
    assert len(bytes.fromhex(key_hex)) == DERIVED_KEY_LENGTH
    assert len(bytes.fromhex(salt_hex)) == 16


def test_same_password_gets_fresh_salt() -> None:
    assert get_password_hash("repeat") != get_password_hash("repeat")


def test_verify_accepts_original_password() -> None:
    digest = get_password_hash("Passw0rd!")
    assert verify_password("Passw0rd!", digest) is True


def test_verify_rejects_every_single_character_mutation() -> None:
    password = "Passw0rd"
    digest = get_password_hash(password)
    for index, char in enumerate(password):
        replacement = "x" if char != "x" else "y"
        mutated = password[:index] + replacement + password[index + 1:]
        assert verify_password(mutated, digest) is False
    assert verify_password(password + "!", digest) is False
    assert verify_password(password[:-1], digest) is False


@pytest.mark.parametrize(
    "stored",
    [
        "",
        "no-separator",
        "zz.11",
        "abcd.0011",
        "a.b.c",
        "00" * DERIVED_KEY_LENGTH + ".",
    ],
)
def test_verify_returns_false_for_malformed_digest(stored: str) -> None:
    assert verify_password("anything", stored) is False


def test_token_round_trip_preserves_claims() -> None:
    claims = decode_access_token(create_access_token(USER))
    assert (claims["id"], claims["username"], claims["role"]) == (7, "alice", "hr")
    assert claims["exp"] - claims["iat"] == settings.ACCESS_TOKEN_EXPIRE_DAYS * 24 * 60 * 60


def test_expired_token_fails_verification() -> None:
    token = create_access_token(USER, expires_delta=timedelta(seconds=-5))
    with pytest.raises(ExpiredTokenError):
        decode_access_token(token)


def test_token_signed_with_another_secret_fails() -> None:
    token = jwt.encode(
        {"id": 7, "username": "alice", "role": "hr", "exp": 4102444800},
        "some-other-secret",
        algorithm="HS256",
    )
    with pytest.raises(BadSignatureError):
        decode_access_token(token)


def test_garbage_token_is_malformed() -> None:
    with pytest.raises(MalformedTokenError):
        decode_access_token("not-a-jwt")


def test_token_missing_role_claim_is_malformed() -> None:
    token = jwt.encode({"id": 7, "username": "alice", "exp": 4102444800}, settings.JWT_SECRET, algorithm="HS256")
    with pytest.raises(MalformedTokenError):
        decode_access_token(token)
