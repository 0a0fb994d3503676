from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from uigen_core.tokens import JwtTokenService


def test_sign_and_verify_round_trip_claims() -> None:
    tokens = JwtTokenService("test-secret")
    token = tokens.sign({"userId": "user-1", "email": "a@example.com"}, timedelta(days=7))

    claims = tokens.verify(token)
    assert claims is not None
    assert claims["userId"] == "user-1"
    assert claims["email"] == "a@example.com"
    assert claims["exp"] - claims["iat"] == 7 * 24 * 60 * 60


def test_sign_uses_hs256() -> None:
    token = JwtTokenService("test-secret").sign({"userId": "u"}, timedelta(minutes=5))
    assert jwt.get_unverified_header(token)["alg"] == "HS256"


def test_verify_rejects_wrong_secret_and_garbage() -> None:
    token = JwtTokenService("secret-a").sign({"userId": "u"}, timedelta(minutes=5))

    assert JwtTokenService("secret-b").verify(token) is None
    assert JwtTokenService("secret-a").verify("not-a-token") is None
    assert JwtTokenService("secret-a").verify(token[:-2] + "xx") is None


def test_verify_rejects_expired_token() -> None:
    tokens = JwtTokenService("test-secret")
    issued = datetime.now(UTC) - timedelta(days=8)
    token = tokens.sign({"userId": "u"}, timedelta(days=7), now=issued)

    assert tokens.verify(token) is None


def test_empty_secret_is_refused() -> None:
    with pytest.raises(ValueError):
        JwtTokenService("")
