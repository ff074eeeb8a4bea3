"""
FastAPI dependencies for authentication.

Provides ``db_session``, ``get_current_user_id`` and ``get_current_user``
dependencies that are used across all protected routes.
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from auth.accounts import resolve_current_user
from auth.exceptions import InvalidTokenError
from auth.tokens import TokenSigner, get_token_signer
from database.models import User
from database.session import get_db_session

_BEARER_PREFIX = "bearer "


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


async def get_current_user_id(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    signer: TokenSigner = Depends(get_token_signer),
) -> str:
    """
    Extract and verify the Bearer token, returning the authenticated
    ``user_id`` (UUID string).
    """
    if not authorization or not authorization.lower().startswith(_BEARER_PREFIX):
        raise InvalidTokenError("missing bearer token")
    token = authorization[len(_BEARER_PREFIX):].strip()
    return signer.verify(token)


async def get_current_user(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(db_session),
) -> User:
    """Resolve the token subject to a stored account."""
    return await resolve_current_user(session, user_id)
