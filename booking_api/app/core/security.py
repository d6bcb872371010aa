"""
Session tokens and the cookie authentication dependency.

Tokens are JSON Web Tokens signed with HMAC.  The payload is whatever
the client supplied to ``POST /jwt-auth`` plus an ``exp`` claim holding
the expiry as a UNIX timestamp.  Nothing is stored server-side: a token
is valid exactly when its signature matches and it has not expired.

``require_session`` is the FastAPI dependency that gates protected
routes.  It reads the token from the session cookie, verifies it and
attaches the decoded claims to ``request.state.claims``.
"""

import base64
import hashlib
import hmac
import json
import logging
import time
from typing import Any, Callable, Dict, Mapping

from fastapi import Depends, Request

from .errors import AuthInvalidError, AuthMissingError


logger = logging.getLogger(__name__)

DEFAULT_TOKEN_LIFETIME = 60 * 60

_DIGESTS = {
    "HS256": hashlib.sha256,
    "HS384": hashlib.sha384,
    "HS512": hashlib.sha512,
}


class AuthError(Exception):
    """A session token was rejected."""


class InvalidTokenError(AuthError):
    """Malformed token, unexpected algorithm or signature mismatch."""


class ExpiredTokenError(AuthError):
    """Signature is valid but the ``exp`` claim has passed."""


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _json_segment(value: Mapping[str, Any]) -> str:
    return _b64_url_encode(json.dumps(value, separators=(",", ":")).encode("utf-8"))


class TokenService:
    """Issue and verify signed, time-limited session tokens.

    Parameters
    ----------
    secret : str
        Server-held signing secret.
    lifetime_seconds : int
        Validity of an issued token.  Defaults to one hour.
    algorithm : str
        One of ``HS256``, ``HS384`` or ``HS512``.
    clock : Callable[[], float]
        Source of the current UNIX time.  Tests replace it to move time
        forward.
    """

    def __init__(
        self,
        secret: str,
        lifetime_seconds: int = DEFAULT_TOKEN_LIFETIME,
        algorithm: str = "HS256",
        clock: Callable[[], float] = time.time,
    ) -> None:
        if algorithm not in _DIGESTS:
            raise ValueError(f"Unsupported token algorithm: {algorithm}")
        self._secret = secret.encode("utf-8")
        self.lifetime_seconds = lifetime_seconds
        self.algorithm = algorithm
        self._clock = clock

    def _sign(self, signing_input: bytes) -> bytes:
        return hmac.new(self._secret, signing_input, _DIGESTS[self.algorithm]).digest()

    def issue(self, claims: Mapping[str, Any]) -> str:
        """Create a signed token carrying ``claims``.

        The claims are copied and extended with ``exp``; a caller-supplied
        ``exp`` is overwritten.  Raises ``TypeError`` if the claims are not
        JSON serializable.
        """
        payload = dict(claims)
        payload["exp"] = int(self._clock()) + self.lifetime_seconds
        header_b64 = _json_segment({"alg": self.algorithm, "typ": "JWT"})
        payload_b64 = _json_segment(payload)
        signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
        signature_b64 = _b64_url_encode(self._sign(signing_input))
        return f"{header_b64}.{payload_b64}.{signature_b64}"

    def verify(self, token: str) -> Dict[str, Any]:
        """Return the claims carried by ``token``.

        Raises
        ------
        InvalidTokenError
            The token is malformed, was signed with another algorithm or
            secret, or has been tampered with.
        ExpiredTokenError
            The token is authentic but its lifetime has passed.
        """
        parts = token.split(".")
        if len(parts) != 3:
            raise InvalidTokenError("Token must have three segments")
        header_b64, payload_b64, signature_b64 = parts
        try:
            header = json.loads(_b64_url_decode(header_b64))
            signature = _b64_url_decode(signature_b64)
        except (ValueError, UnicodeDecodeError) as exc:
            raise InvalidTokenError("Token is not valid base64url JSON") from exc
        if not isinstance(header, dict) or header.get("alg") != self.algorithm:
            raise InvalidTokenError("Unexpected token algorithm")

        expected = self._sign(f"{header_b64}.{payload_b64}".encode("utf-8"))
        if not hmac.compare_digest(expected, signature):
            raise InvalidTokenError("Signature mismatch")

        try:
            payload = json.loads(_b64_url_decode(payload_b64))
        except (ValueError, UnicodeDecodeError) as exc:
            raise InvalidTokenError("Token payload is not valid JSON") from exc
        if not isinstance(payload, dict) or not isinstance(payload.get("exp"), (int, float)):
            raise InvalidTokenError("Token payload has no expiry")
        if payload["exp"] <= self._clock():
            raise ExpiredTokenError("Token has expired")

        payload.pop("exp")
        return payload


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def require_session(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> Dict[str, Any]:
    """Dependency that admits only requests carrying a valid session cookie.

    A missing cookie yields 401, a cookie that fails verification yields
    403.  On success the claims are stored on ``request.state.claims`` and
    returned.
    """
    cookie_name = request.app.state.settings.cookie_name
    token = request.cookies.get(cookie_name)
    if not token:
        logger.debug("Rejected %s: no %s cookie", request.url.path, cookie_name)
        raise AuthMissingError()
    try:
        claims = tokens.verify(token)
    except AuthError as exc:
        logger.debug("Rejected %s: %s", request.url.path, exc)
        raise AuthInvalidError() from exc
    request.state.claims = claims
    return claims
