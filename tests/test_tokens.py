"""Tests for access token issuance and verification."""

from __future__ import annotations

import time

import jwt
import pytest

from user_service.config import Settings
from user_service.domain.errors import MalformedToken, TokenExpired, TokenInvalid
from user_service.security.tokens import TokenIssuer, parse_bearer

TEST_SECRET = "token-test-secret-with-at-least-32-bytes"
TEST_ISSUER = "user-service.tokens"


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(TEST_SECRET, TEST_ISSUER, ttl_seconds=300)


def test_issued_token_round_trips_subject(token_issuer):
    issued = token_issuer.issue("alice@x.com")
    assert issued.token
    assert issued.expires_in == 300
    assert token_issuer.verify(issued.token) == "alice@x.com"


def test_issued_token_carries_issuer_and_expiry(token_issuer):
    issued = token_issuer.issue("alice@x.com")
    claims = jwt.decode(issued.token, TEST_SECRET, algorithms=["HS256"], issuer=TEST_ISSUER)
    assert claims["sub"] == "alice@x.com"
    assert claims["exp"] - claims["iat"] == 300


def test_expired_token_is_reported_as_expired():
    issuer = TokenIssuer(TEST_SECRET, TEST_ISSUER, ttl_seconds=-10)
    token = issuer.issue("alice@x.com").token
    with pytest.raises(TokenExpired):
        issuer.verify(token)


def test_token_signed_with_another_key_is_invalid(token_issuer):
    forged = TokenIssuer("another-secret-with-at-least-32-bytes!", TEST_ISSUER, 300)
    with pytest.raises(TokenInvalid):
        token_issuer.verify(forged.issue("alice@x.com").token)


def test_token_from_foreign_issuer_is_invalid(token_issuer):
    foreign = TokenIssuer(TEST_SECRET, "someone-else", 300)
    with pytest.raises(TokenInvalid):
        token_issuer.verify(foreign.issue("alice@x.com").token)


def test_token_without_subject_is_invalid(token_issuer):
    now = int(time.time())
    token = jwt.encode(
        {"iss": TEST_ISSUER, "iat": now, "exp": now + 60},
        TEST_SECRET,
        algorithm="HS256",
    )
    with pytest.raises(TokenInvalid):
        token_issuer.verify(token)


@pytest.mark.parametrize("garbage", ["not-a-token", "a.b.c", ""])
def test_garbage_input_is_malformed(token_issuer, garbage):
    with pytest.raises(MalformedToken):
        token_issuer.verify(garbage)


def test_issuer_reads_signing_configuration_from_settings():
    settings = Settings(jwt_secret=TEST_SECRET, jwt_issuer="cfg-issuer", jwt_ttl_seconds=42)
    issuer = TokenIssuer.from_settings(settings)
    issued = issuer.issue("bob@x.com")
    assert issued.expires_in == 42
    assert jwt.decode(issued.token, TEST_SECRET, algorithms=["HS256"], issuer="cfg-issuer")["sub"] == "bob@x.com"


@pytest.mark.parametrize(
    ("header", "expected"),
    [("Bearer abc.def.ghi", "abc.def.ghi"), ("bearer   tok ", "tok")],
)
def test_parse_bearer_extracts_token(header, expected):
    assert parse_bearer(header) == expected


@pytest.mark.parametrize("header", [None, "", "Basic abc", "Bearer", "Bearer   "])
def test_parse_bearer_rejects_other_headers(header):
    with pytest.raises(MalformedToken):
        parse_bearer(header)
