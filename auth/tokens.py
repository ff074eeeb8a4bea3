"""
Signed bearer token creation and verification.

Tokens are base64url-encoded JSON payloads signed with HMAC-SHA256::

    <base64url({"sub": ..., "iat": ..., "exp": ...})>.<hex signature>

The secret is loaded from ``config.token_secret`` (env var: ``TOKEN_SECRET``)
and handed to a ``TokenSigner`` once per process.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from functools import lru_cache
from typing import Callable, Optional

from auth.exceptions import InvalidTokenError
from config.settings import config


class TokenSigner:
    def __init__(
        self,
        secret: str,
        expiry_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._key = secret.encode()
        self._expiry_seconds = expiry_seconds
        self._clock = clock

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._key, raw, hashlib.sha256).hexdigest()

    def issue(self, account_id: str, expiry_seconds: Optional[int] = None) -> str:
        """Create a signed token whose subject is ``account_id``."""
        now = int(self._clock())
        ttl = self._expiry_seconds if expiry_seconds is None else expiry_seconds
        payload = {"sub": str(account_id), "iat": now, "exp": now + ttl}
        raw = json.dumps(payload, separators=(",", ":")).encode()
        encoded = urlsafe_b64encode(raw).decode().rstrip("=")
        return encoded + "." + self._sign(raw)

    def verify(self, token: Optional[str]) -> str:
        """
        Verify token and return the subject.

        Raises ``InvalidTokenError`` on malformed, tampered or expired tokens.
        """
        if not token:
            raise InvalidTokenError("empty token")
        parts = token.split(".")
        if len(parts) != 2:
            raise InvalidTokenError("bad format")
        encoded, signature = parts
        try:
            raw = urlsafe_b64decode(encoded + "=" * (-len(encoded) % 4))
        except (binascii.Error, ValueError) as exc:
            raise InvalidTokenError("bad encoding") from exc

        if not hmac.compare_digest(signature.encode(), self._sign(raw).encode()):
            raise InvalidTokenError("bad signature")

        try:
            payload = json.loads(raw)
            subject = payload["sub"]
            expires_at = float(payload["exp"])
        except (ValueError, KeyError, TypeError) as exc:
            raise InvalidTokenError("bad payload") from exc
        if not subject:
            raise InvalidTokenError("bad payload")
        if expires_at <= self._clock():
            raise InvalidTokenError("token expired")
        return str(subject)


@lru_cache(maxsize=1)
def get_token_signer() -> TokenSigner:
    """Process-wide signer built from settings; also a FastAPI dependency."""
    return TokenSigner(config.token_secret, config.token_expiry_seconds)
