# tests/test_security.py
"""Tests for password hashing and access tokens."""

import pytest

from inkwell.core.security import (
    JWTError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_round_trip() -> None:
    hashed = hash_password("hunter22")

    assert hashed != "hunter22"
    assert verify_password("hunter22", hashed)
    assert not verify_password("hunter23", hashed)
    assert not verify_password("", hashed)


def test_token_carries_user_id() -> None:
    token = create_access_token(42, "zed")
    assert decode_access_token(token) == 42


def test_expired_token_is_rejected() -> None:
    token = create_access_token(42, "zed", expires_minutes=-1)
    with pytest.raises(JWTError):
        decode_access_token(token)


def test_garbage_token_is_rejected() -> None:
    with pytest.raises(JWTError):
        decode_access_token("definitely.not.a-token")
