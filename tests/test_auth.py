from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from payonerupee.auth import ALGORITHM, TOKEN_TTL, TokenIssuer
from payonerupee.errors import TokenError

SECRET = "test-jwt-secret-that-is-long-enough-32"


@pytest.fixture
def issuer():
    return TokenIssuer(SECRET)


def test_fresh_token_validates(issuer):
    claims = issuer.validate(issuer.issue())

    assert claims["paid"] is True
    assert claims["exp"] - claims["iat"] == int(TOKEN_TTL.total_seconds())


def test_token_carries_issue_time_in_milliseconds(issuer):
    now = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
    token = issuer.issue(now=now)

    claims = jwt.get_unverified_claims(token)
    assert claims["ts"] == int(now.timestamp() * 1000)
    assert claims["iat"] == int(now.timestamp())


def test_token_still_valid_just_before_expiry(issuer):
    now = datetime.now(timezone.utc) - TOKEN_TTL + timedelta(minutes=5)
    assert issuer.validate(issuer.issue(now=now))["paid"] is True


def test_expired_token_fails(issuer):
    now = datetime.now(timezone.utc) - TOKEN_TTL - timedelta(minutes=5)
    token = issuer.issue(now=now)

    with pytest.raises(TokenError):
        issuer.validate(token)


def test_token_from_other_secret_fails(issuer):
    forged = TokenIssuer("some-other-secret-nobody-should-know").issue()

    with pytest.raises(TokenError):
        issuer.validate(forged)


def test_tampered_token_fails(issuer):
    token = issuer.issue()
    header, payload, sig = token.split(".")
    tampered = ".".join([header, payload, sig[::-1]])

    with pytest.raises(TokenError):
        issuer.validate(tampered)


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
def test_garbage_token_fails(issuer, token):
    with pytest.raises(TokenError):
        issuer.validate(token)


def test_other_algorithm_fails(issuer):
    token = jwt.encode({"paid": True}, SECRET, algorithm="HS512")

    with pytest.raises(TokenError):
        issuer.validate(token)


def test_secret_is_required():
    with pytest.raises(ValueError):
        TokenIssuer("")


def test_algorithm_is_hs256(issuer):
    assert jwt.get_unverified_header(issuer.issue())["alg"] == ALGORITHM
