"""
Tests for the auth error taxonomy.
"""

import importlib.util
import warnings
from pathlib import Path

import pytest

from auth.exceptions import (
    AuthenticationFailedError,
    DuplicateAccountError,
    InvalidCredentialError,
    InvalidTokenError,
    UnknownSubjectError,
)


class TestStatusCodes:
    @pytest.mark.parametrize(
        "error, expected",
        [
            (InvalidCredentialError, 422),
            (DuplicateAccountError, 422),
            (AuthenticationFailedError, 401),
            (InvalidTokenError, 401),
            (UnknownSubjectError, 401),
        ],
    )
    def test_status_code(self, error, expected):
        assert error.status_code == expected

    def test_module_imports_without_deprecation_warnings(self):
        path = Path(__file__).resolve().parents[1] / "auth" / "exceptions.py"
        spec = importlib.util.spec_from_file_location("_auth_exceptions_copy", path)
        module = importlib.util.module_from_spec(spec)

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            spec.loader.exec_module(module)

        assert not [w for w in caught if issubclass(w.category, DeprecationWarning)]
