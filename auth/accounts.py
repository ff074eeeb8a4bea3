"""
Account operations — signup, login, profile updates and token subject lookup.

The password hash is computed here, never in a save hook: ``create_account``
always hashes the new plaintext, ``update_account`` only does so when the
change set explicitly carries a password.
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from auth.exceptions import AuthenticationFailedError, UnknownSubjectError
from auth.password import create_credential, matches_credential, reject_credential
from auth.schemas import AccountUpdate
from database.helpers import (
    find_account_by_email,
    find_account_by_id,
    insert_account,
    update_account_row,
)
from database.models import User

logger = logging.getLogger(__name__)


async def create_account(
    session: AsyncSession,
    *,
    name: str,
    email: str,
    password: str,
) -> User:
    """Hash ``password`` and insert a new user. Raises ``DuplicateAccountError``."""
    password_hash = await run_in_threadpool(create_credential, password)
    user = User(
        user_id=uuid.uuid4(),
        name=name,
        email=email,
        password_hash=password_hash,
    )
    await insert_account(session, user)
    logger.info("Registered user %s (%s)", name, user.user_id)
    return user


async def update_account(
    session: AsyncSession,
    user: User,
    changes: AccountUpdate,
) -> User:
    """Apply ``changes`` to ``user``; re-hash only when a new password was sent."""
    if changes.name is not None:
        user.name = changes.name
    if changes.email is not None:
        user.email = changes.email
    if changes.password_changed:
        user.password_hash = await run_in_threadpool(
            create_credential, changes.password
        )
        logger.info("Password changed for user %s", user.user_id)

    await update_account_row(session, user)
    return user


async def authenticate(session: AsyncSession, email: str, password: str) -> User:
    """
    Return the user owning ``email`` if ``password`` matches its credential.

    Unknown email and wrong password both raise ``AuthenticationFailedError``.
    """
    user = await find_account_by_email(session, email, with_password=True)
    if user is None:
        # Unknown emails cost one bcrypt check too, like a wrong password.
        matched = await run_in_threadpool(reject_credential, password)
    else:
        matched = await run_in_threadpool(
            matches_credential, password, user.password_hash
        )
    if user is None or not matched:
        logger.info("Failed login for %s", email)
        raise AuthenticationFailedError()

    logger.info("Login: %s (%s)", user.name, user.user_id)
    return user


async def resolve_current_user(session: AsyncSession, account_id: str) -> User:
    """Look up the subject of a verified token."""
    user = await find_account_by_id(session, account_id)
    if user is None:
        logger.warning("Token subject %s no longer exists", account_id)
        raise UnknownSubjectError()
    return user
