"""
Database helper functions — look up and persist ``User`` rows.

Duplicate-key violations on the ``users.email`` unique index surface as
``DuplicateAccountError``.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import undefer

from auth.exceptions import DuplicateAccountError
from database.models import User

logger = logging.getLogger(__name__)


def _to_uuid(value: str | uuid.UUID) -> uuid.UUID:
    return uuid.UUID(value) if isinstance(value, str) else value


async def find_account_by_email(
    session: AsyncSession,
    email: str,
    *,
    with_password: bool = False,
) -> Optional[User]:
    """Return the user with ``email``; the password hash is only loaded on request."""
    stmt = select(User).where(User.email == email)
    if with_password:
        stmt = stmt.options(undefer(User.password_hash))
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def find_account_by_id(
    session: AsyncSession,
    account_id: str | uuid.UUID,
) -> Optional[User]:
    """Return the user with ``account_id`` or ``None`` (also for malformed ids)."""
    try:
        uid = _to_uuid(account_id)
    except (ValueError, AttributeError, TypeError):
        return None
    result = await session.execute(select(User).where(User.user_id == uid))
    return result.scalar_one_or_none()


async def _flush(session: AsyncSession, email: str) -> None:
    try:
        await session.flush()
    except IntegrityError as exc:
        logger.info("Rejected duplicate email %s", email)
        raise DuplicateAccountError() from exc


async def insert_account(session: AsyncSession, user: User) -> User:
    """Insert a new user row; the email unique index decides collisions."""
    session.add(user)
    await _flush(session, user.email)
    return user


async def update_account_row(session: AsyncSession, user: User) -> User:
    """Stamp ``updated_at`` and flush pending changes on a persistent user."""
    if session.is_modified(user):
        user.updated_at = datetime.now(timezone.utc)
    await _flush(session, user.email)
    return user
