# tests/managers/test_token_manager.py
"""Tests for identity token verification."""

from collections.abc import Callable
from datetime import timedelta

from jose import jwt

from quillblog.managers.token_manager import decode_identity_token


def test_valid_token_yields_identity(make_token: Callable[..., str]) -> None:
    token = make_token("u1", email="alice@example.com", username="alice")

    caller = decode_identity_token(token)

    assert caller is not None
    assert (caller.user_id, caller.email, caller.username) == ("u1", "alice@example.com", "alice")


def test_profile_claims_are_optional(make_token: Callable[..., str]) -> None:
    caller = decode_identity_token(make_token("u1"))

    assert caller is not None
    assert caller.email is None
    assert caller.username is None


def test_expired_token(make_token: Callable[..., str]) -> None:
    assert decode_identity_token(make_token("u1", expires_in=timedelta(seconds=-1))) is None


def test_token_without_subject(make_token: Callable[..., str]) -> None:
    assert decode_identity_token(make_token(None)) is None


def test_wrong_signature() -> None:
    token = jwt.encode({"sub": "u1"}, "someone-else", algorithm="HS256")
    assert decode_identity_token(token) is None


def test_garbage() -> None:
    assert decode_identity_token("not-a-jwt") is None
