"""
Tests for token issuing and verification.
"""
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from salon.core.security import TokenExpiredError, TokenMalformedError, TokenService


@pytest.fixture
def service():
    return TokenService("unit-secret")


def test_round_trip_returns_identity_and_role(service):
    claims = service.verify(service.issue(7, "admin", "admin"))
    assert claims.identity == 7
    assert claims.role == "admin"
    assert claims.username == "admin"


def test_default_lifetime_is_a_day(service):
    claims = service.verify(service.issue(1, "admin", "admin"))
    remaining = claims.expires_at - datetime.now(timezone.utc)
    assert timedelta(hours=23) < remaining <= timedelta(hours=24)


def test_expired_token(service):
    token = service.issue(1, "admin", "admin", expires_delta=timedelta(seconds=-5))
    with pytest.raises(TokenExpiredError):
        service.verify(token)


def test_altered_signature_is_malformed(service):
    header, payload, signature = service.issue(1, "admin", "admin").split(".")
    i = len(signature) // 2
    swapped = "A" if signature[i] != "A" else "B"
    tampered = ".".join([header, payload, signature[:i] + swapped + signature[i + 1:]])
    with pytest.raises(TokenMalformedError):
        service.verify(tampered)


def test_other_secret_is_malformed(service):
    token = TokenService("another-secret").issue(1, "admin", "admin")
    with pytest.raises(TokenMalformedError):
        service.verify(token)


def test_garbage_is_malformed(service):
    with pytest.raises(TokenMalformedError):
        service.verify("not-a-token")


def test_missing_claims_are_malformed(service):
    token = jwt.encode(
        {"exp": datetime.now(timezone.utc) + timedelta(minutes=5)}, "unit-secret", algorithm="HS256"
    )
    with pytest.raises(TokenMalformedError):
        service.verify(token)


def test_empty_secret_is_rejected():
    with pytest.raises(ValueError):
        TokenService("")
