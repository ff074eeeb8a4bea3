"""
Typed failures raised by the authentication core.

Each error carries the HTTP status and the fixed message the request layer
returns; see ``api.errors`` for the translation.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Dict, List, Optional

INVALID_DATA_MESSAGE = "The given data was invalid"


class AuthError(Exception):
    status_code: int = HTTPStatus.BAD_REQUEST
    message: str = "Bad request."

    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(detail or self.message)

    def to_dict(self) -> Dict[str, object]:
        return {"message": self.message}


class InvalidCredentialError(AuthError):
    """Plaintext password is empty, missing or longer than bcrypt accepts."""

    status_code = HTTPStatus.UNPROCESSABLE_ENTITY
    message = INVALID_DATA_MESSAGE

    def to_dict(self) -> Dict[str, object]:
        errors: Dict[str, List[str]] = {"password": [str(self)]}
        return {"message": self.message, "errors": errors}


class DuplicateAccountError(AuthError):
    status_code = HTTPStatus.UNPROCESSABLE_ENTITY
    message = INVALID_DATA_MESSAGE

    def to_dict(self) -> Dict[str, object]:
        return {
            "message": self.message,
            "errors": {"email": ["The email has already been taken."]},
        }


class AuthenticationFailedError(AuthError):
    """Wrong password or unknown email; callers cannot tell which."""

    status_code = HTTPStatus.UNAUTHORIZED
    message = "Email or Password is incorrect."


class InvalidTokenError(AuthError):
    status_code = HTTPStatus.UNAUTHORIZED
    message = "Unauthorized."


class UnknownSubjectError(AuthError):
    """Token is valid but its subject no longer exists."""

    status_code = HTTPStatus.UNAUTHORIZED
    message = "Unauthorized."
