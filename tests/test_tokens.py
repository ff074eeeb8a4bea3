"""
Tests for signed bearer token issue / verify.
"""

import hashlib
import hmac
import json
from base64 import urlsafe_b64decode, urlsafe_b64encode

import pytest

from auth.exceptions import InvalidTokenError
from auth.tokens import TokenSigner, get_token_signer


class _Clock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def _signer(clock=None, expiry_seconds: int = 60) -> TokenSigner:
    return TokenSigner("secret", expiry_seconds, clock=clock or _Clock())


class TestIssueAndVerify:
    def test_round_trip_returns_subject(self):
        signer = _signer()
        token = signer.issue("account-a")
        assert signer.verify(token) == "account-a"

    def test_valid_until_expiry(self):
        clock = _Clock()
        signer = _signer(clock, expiry_seconds=60)
        token = signer.issue("account-a")

        clock.now += 59
        assert signer.verify(token) == "account-a"

        clock.now += 1
        with pytest.raises(InvalidTokenError, match="expired"):
            signer.verify(token)

    def test_payload_carries_issued_at_and_expiry(self):
        clock = _Clock(1000.0)
        token = _signer(clock, expiry_seconds=30).issue("account-a")
        encoded = token.split(".")[0]
        payload = json.loads(urlsafe_b64decode(encoded + "=" * (-len(encoded) % 4)))
        assert payload == {"sub": "account-a", "iat": 1000, "exp": 1030}

    def test_flipped_signature_fails(self):
        signer = _signer()
        token = signer.issue("account-a")
        last = token[-1]
        tampered = token[:-1] + ("0" if last != "0" else "1")
        with pytest.raises(InvalidTokenError, match="signature"):
            signer.verify(tampered)

    def test_tampered_payload_fails(self):
        signer = _signer()
        _, signature = signer.issue("account-a").split(".")
        forged = urlsafe_b64encode(
            json.dumps({"sub": "account-b", "iat": 0, "exp": 9_999_999_999}).encode()
        ).decode().rstrip("=")
        with pytest.raises(InvalidTokenError):
            signer.verify(f"{forged}.{signature}")

    def test_other_secret_rejected(self):
        token = TokenSigner("one", 60).issue("account-a")
        with pytest.raises(InvalidTokenError):
            TokenSigner("two", 60).verify(token)

    @pytest.mark.parametrize(
        "token",
        ["", None, "no-dot", "a.b.c", "!!!.deadbeef", "é.é"],
    )
    def test_malformed_tokens_rejected(self, token):
        with pytest.raises(InvalidTokenError):
            _signer().verify(token)

    def test_signed_payload_without_subject_rejected(self):
        raw = json.dumps({"exp": 9_999_999_999}).encode()
        sig = hmac.new(b"secret", raw, hashlib.sha256).hexdigest()
        token = urlsafe_b64encode(raw).decode().rstrip("=") + "." + sig
        with pytest.raises(InvalidTokenError, match="payload"):
            _signer().verify(token)


class TestSignerConfiguration:
    def test_empty_secret_refused(self):
        with pytest.raises(ValueError):
            TokenSigner("", 60)

    def test_process_signer_is_shared(self):
        assert get_token_signer() is get_token_signer()
