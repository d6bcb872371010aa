# This file tests session token issuance and verification.
# It covers the round trip, expiry handling and every way a token can be rejected.

from __future__ import annotations

import base64
import hashlib
import hmac
import json

import pytest

from booking_api.app.core.security import (
    AuthError,
    ExpiredTokenError,
    InvalidTokenError,
    TokenService,
)


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _segment(value: dict[str, object]) -> str:
    raw = json.dumps(value, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("utf-8")


def _decode_segment(segment: str) -> dict[str, object]:
    padded = segment + "=" * (-len(segment) % 4)
    return json.loads(base64.urlsafe_b64decode(padded))


def test_verify_returns_issued_claims_unchanged() -> None:
    tokens = TokenService("secret")
    claims = {"email": "a@x.com", "name": "Ada", "roles": ["customer"], "age": 36}

    assert tokens.verify(tokens.issue(claims)) == claims


def test_issue_does_not_mutate_claims() -> None:
    tokens = TokenService("secret")
    claims = {"email": "a@x.com"}

    tokens.issue(claims)

    assert claims == {"email": "a@x.com"}


def test_issue_embeds_expiry_one_hour_ahead_by_default() -> None:
    clock = FakeClock()
    tokens = TokenService("secret", clock=clock)

    header_b64, payload_b64, _ = tokens.issue({"email": "a@x.com"}).split(".")

    assert _decode_segment(header_b64) == {"alg": "HS256", "typ": "JWT"}
    assert _decode_segment(payload_b64)["exp"] == int(clock.now) + 3600


def test_caller_supplied_exp_is_overwritten() -> None:
    clock = FakeClock()
    tokens = TokenService("secret", lifetime_seconds=60, clock=clock)

    _, payload_b64, _ = tokens.issue({"email": "a@x.com", "exp": 1}).split(".")

    assert _decode_segment(payload_b64)["exp"] == int(clock.now) + 60


def test_token_expires_after_lifetime() -> None:
    clock = FakeClock()
    tokens = TokenService("secret", lifetime_seconds=3600, clock=clock)
    token = tokens.issue({"email": "a@x.com"})

    clock.now += 3599
    assert tokens.verify(token) == {"email": "a@x.com"}

    clock.now += 1
    with pytest.raises(ExpiredTokenError):
        tokens.verify(token)


def test_token_signed_with_other_secret_is_invalid() -> None:
    token = TokenService("other-secret").issue({"email": "a@x.com"})

    with pytest.raises(InvalidTokenError):
        TokenService("secret").verify(token)


def test_tampered_payload_is_invalid() -> None:
    tokens = TokenService("secret")
    header_b64, _, signature_b64 = tokens.issue({"email": "a@x.com"}).split(".")
    forged_payload = _segment({"email": "admin@x.com", "exp": 4_102_444_800})

    with pytest.raises(InvalidTokenError):
        tokens.verify(f"{header_b64}.{forged_payload}.{signature_b64}")


def test_expired_token_with_forged_expiry_is_invalid_not_expired() -> None:
    clock = FakeClock()
    tokens = TokenService("secret", lifetime_seconds=60, clock=clock)
    header_b64, _, signature_b64 = tokens.issue({"email": "a@x.com"}).split(".")
    clock.now += 120
    extended = _segment({"email": "a@x.com", "exp": int(clock.now) + 3600})

    with pytest.raises(InvalidTokenError):
        tokens.verify(f"{header_b64}.{extended}.{signature_b64}")


def test_token_from_other_algorithm_is_invalid() -> None:
    token = TokenService("secret", algorithm="HS512").issue({"email": "a@x.com"})

    with pytest.raises(InvalidTokenError):
        TokenService("secret", algorithm="HS256").verify(token)


def test_hs512_round_trip() -> None:
    tokens = TokenService("secret", algorithm="HS512")

    assert tokens.verify(tokens.issue({"email": "a@x.com"})) == {"email": "a@x.com"}


@pytest.mark.parametrize(
    "token",
    [
        "",
        "not-a-token",
        "only.two",
        "a.b.c",
        "four.part.token.value",
        "eyJhbGciOiJIUzI1NiJ9.%%%.abc",
    ],
)
def test_malformed_tokens_are_invalid(token: str) -> None:
    with pytest.raises(InvalidTokenError):
        TokenService("secret").verify(token)


def test_signed_payload_without_expiry_is_invalid() -> None:
    header_b64 = _segment({"alg": "HS256", "typ": "JWT"})
    payload_b64 = _segment({"email": "a@x.com"})
    signature = hmac.new(b"secret", f"{header_b64}.{payload_b64}".encode(), hashlib.sha256).digest()
    signature_b64 = base64.urlsafe_b64encode(signature).rstrip(b"=").decode()

    with pytest.raises(InvalidTokenError):
        TokenService("secret").verify(f"{header_b64}.{payload_b64}.{signature_b64}")


def test_token_errors_share_a_base_class() -> None:
    assert issubclass(InvalidTokenError, AuthError)
    assert issubclass(ExpiredTokenError, AuthError)


def test_unsupported_algorithm_is_rejected() -> None:
    with pytest.raises(ValueError):
        TokenService("secret", algorithm="RS256")
