"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and a fixed work factor.
"""

from __future__ import annotations

from typing import Optional

import bcrypt

from auth.exceptions import InvalidCredentialError

BCRYPT_ROUNDS = 10
# bcrypt only reads the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


def create_credential(plaintext: Optional[str]) -> str:
    """Hash a password with bcrypt (fresh salt every call, work factor 10)."""
    if not plaintext:
        raise InvalidCredentialError("Password is required.")
    raw = plaintext.encode()
    if len(raw) > MAX_PASSWORD_BYTES:
        raise InvalidCredentialError(
            f"Password must not exceed {MAX_PASSWORD_BYTES} bytes."
        )
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode()


def matches_credential(plaintext: Optional[str], stored_hash: Optional[str]) -> bool:
    """Constant-time comparison against a bcrypt hash; ``False`` when no hash is set."""
    if not stored_hash or not plaintext:
        return False
    raw = plaintext.encode()
    # Older bcrypt releases truncate instead of refusing overlong input.
    if len(raw) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(raw, stored_hash.encode())
    except (ValueError, TypeError):
        return False


# Checked against when a login names no existing account.
_DUMMY_CREDENTIAL = create_credential("dummy-password-for-unknown-accounts")


def reject_credential(plaintext: Optional[str]) -> bool:
    """
    Pay the same bcrypt cost as ``matches_credential`` when there is no
    account to check against. Always returns ``False``.
    """
    raw = (plaintext or "").encode()[:MAX_PASSWORD_BYTES]
    bcrypt.checkpw(raw, _DUMMY_CREDENTIAL.encode())
    return False
